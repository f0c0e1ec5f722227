"""Room lifecycle service layer."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import ulid

from huddle.domain.identity.exceptions import UserNotFound
from huddle.domain.identity.models import UserSnapshot
from huddle.domain.notifications import NotificationService, NotificationType, room_link
from huddle.domain.rooms import models, policy
from huddle.domain.rooms.exceptions import RoomError, RoomNotFound
from huddle.infra.store import EntityType, JsonDocumentStore, Record
from huddle.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _find(records: List[Record], room_id: str) -> Optional[int]:
	for pos, record in enumerate(records):
		if str(record.get("id")) == str(room_id):
			return pos
	return None


def _locate(records: List[Record], room_id: str) -> Tuple[int, models.Room]:
	pos = _find(records, room_id)
	if pos is None:
		raise RoomNotFound()
	return pos, models.Room.from_record(records[pos])


class RoomService:
	"""Rooms document operations.

	Lock order is rooms, then users; the users document is only read while
	the rooms lock is held. Invite notifications are appended after the rooms
	transaction has committed.
	"""

	def __init__(self, store: JsonDocumentStore, notifications: NotificationService) -> None:
		self._store = store
		self._notifications = notifications

	async def _users(self) -> UserSnapshot:
		return UserSnapshot(await self._store.load(EntityType.USERS))

	async def create_room(self, owner_id: str, name: str, is_private: bool) -> models.Room:
		async with self._store.transaction(EntityType.ROOMS) as records:
			owner = (await self._users()).get(owner_id)
			if owner is None:
				raise UserNotFound()
			room = models.Room(
				id=str(ulid.new()),
				name=name.strip(),
				is_private=is_private,
				members=[owner.id],
				owner_id=owner.id,
			)
			records.append(room.to_record())
		obs_metrics.inc_room_created("private" if is_private else "public")
		logger.info("room_created", extra={"room": room.id, "owner": owner.id})
		return room

	async def get_room(self, room_id: str) -> models.Room:
		_, room = _locate(await self._store.load(EntityType.ROOMS), room_id)
		return room

	async def list_rooms_for_user(self, user_id: str) -> List[models.Room]:
		records = await self._store.load(EntityType.ROOMS)
		rooms = [models.Room.from_record(record) for record in records if record.get("id")]
		return [room for room in rooms if policy.is_visible_to(room, user_id)]

	async def join_room(self, room_id: str, user_id: str) -> models.Room:
		async with self._store.transaction(EntityType.ROOMS) as records:
			pos, room = _locate(records, room_id)
			policy.ensure_can_join(room)
			if (await self._users()).get(user_id) is None:
				raise UserNotFound()
			if room.has_member(user_id):
				return room
			room.add_member(user_id)
			records[pos] = room.to_record()
		logger.info("room_joined", extra={"room": room.id, "user": user_id})
		return room

	async def invite(self, room_id: str, inviter_id: str, invitee_id: str) -> models.Room:
		"""Add ``invitee_id`` to a private room and notify them.

		Only the owner or an admin may invite. The invitee record is not
		required to exist.
		"""
		try:
			async with self._store.transaction(EntityType.ROOMS) as records:
				pos, room = _locate(records, room_id)
				inviter = (await self._users()).get(inviter_id)
				policy.ensure_can_invite(room, inviter_id, inviter, invitee_id)
				room.add_member(invitee_id)
				records[pos] = room.to_record()
		except RoomError as exc:
			obs_metrics.inc_room_invite(exc.reason)
			raise

		obs_metrics.inc_room_invite("ok")
		inviter_name = inviter.username if inviter is not None else None
		logger.info("room_invite_sent", extra={"room": room.id, "actor": inviter_id, "target": invitee_id})
		await self._notifications.create(
			invitee_id,
			NotificationType.ROOM_INVITE,
			f'{inviter_name or "Someone"} invited you to the private room: "{room.name}".',
			link=room_link(room.id),
			actor_id=str(inviter_id),
			actor_username=inviter_name,
			room_id=room.id,
			room_name=room.name,
		)
		return room

	async def open_direct_message(self, user_id: str, other_id: str) -> models.Room:
		"""Return the DM room for the pair, creating or reviving it."""
		policy.guard_not_self_dm(user_id, other_id)
		async with self._store.transaction(EntityType.ROOMS) as records:
			users = await self._users()
			user = users.get(user_id)
			other = users.get(other_id)
			if user is None or other is None:
				raise UserNotFound()
			room_id = models.direct_message_room_id(user.id, other.id)
			pos = _find(records, room_id)
			if pos is None:
				first, second = sorted((user, other), key=lambda item: item.id)
				room = models.Room(
					id=room_id,
					name=f"DM: {first.username} & {second.username}",
					is_private=True,
					members=[first.id, second.id],
				)
				records.append(room.to_record())
				obs_metrics.inc_room_created("dm")
				logger.info("dm_room_created", extra={"room": room.id})
			else:
				room = models.Room.from_record(records[pos])
				room.add_member(user.id)
				room.add_member(other.id)
				records[pos] = room.to_record()
		return room

	async def leave_direct_message(self, room_id: str, user_id: str) -> models.Room:
		async with self._store.transaction(EntityType.ROOMS) as records:
			pos, room = _locate(records, room_id)
			policy.ensure_can_leave_dm(room, user_id)
			room.remove_member(user_id)
			# Empty DM rooms are kept so the pair can reopen them later.
			records[pos] = room.to_record()
		logger.info("dm_room_left", extra={"room": room.id, "user": user_id})
		return room
