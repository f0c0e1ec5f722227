"""Service layer implementing the friend-request state machine."""

from __future__ import annotations

import logging
from typing import List

from huddle.domain.identity.exceptions import UserNotFound
from huddle.domain.identity.models import User, UserSnapshot
from huddle.domain.identity.schemas import UserPublic
from huddle.domain.notifications import FRIENDS_LINK, NotificationService, NotificationType
from huddle.domain.social import audit, policy
from huddle.domain.social.exceptions import SocialError
from huddle.domain.social.models import RESOLUTION_MESSAGES, RequestResolution
from huddle.domain.social.schemas import FriendshipUpdate
from huddle.infra.store import EntityType, JsonDocumentStore

logger = logging.getLogger(__name__)


def _update(message: str, first: User, second: User) -> FriendshipUpdate:
	return FriendshipUpdate(
		message=message,
		updated_requester=UserPublic.from_user(first),
		updated_recipient=UserPublic.from_user(second),
	)


class RelationshipService:
	"""Send/accept/decline/cancel/remove over two user records.

	Each operation loads the users document, mutates the pair and persists it
	inside one store transaction. Notifications are appended afterwards, once
	the relationship change is durable.
	"""

	def __init__(self, store: JsonDocumentStore, notifications: NotificationService) -> None:
		self._store = store
		self._notifications = notifications

	async def send_request(self, requester_id: str, recipient_id: str) -> FriendshipUpdate:
		try:
			policy.guard_not_self(requester_id, recipient_id)
			async with self._store.transaction(EntityType.USERS) as records:
				snapshot = UserSnapshot(records)
				requester, recipient = policy.require_pair(snapshot, requester_id, recipient_id)
				policy.ensure_can_send(requester, recipient)
				policy.apply_send(requester, recipient)
				snapshot.put(requester, recipient)
		except (SocialError, UserNotFound) as exc:
			audit.inc_send_reject(exc.reason)
			raise

		audit.inc_request_sent()
		audit.log_friend_event("friend_request_sent", {"actor": requester.id, "target": recipient.id})
		await self._notifications.create(
			recipient.id,
			NotificationType.FRIEND_REQUEST_RECEIVED,
			f"{requester.username} sent you a friend request.",
			link=FRIENDS_LINK,
			actor_id=requester.id,
			actor_username=requester.username,
		)
		return _update("Friend request sent.", requester, recipient)

	async def accept_request(self, requester_id: str, recipient_id: str) -> FriendshipUpdate:
		"""The recipient accepts the request ``requester_id`` sent them."""
		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			requester, recipient = policy.require_pair(snapshot, requester_id, recipient_id)
			policy.apply_accept(requester, recipient)
			snapshot.put(requester, recipient)

		audit.inc_request_resolved(RequestResolution.ACCEPTED.value)
		audit.log_friend_event("friend_request_accepted", {"actor": recipient.id, "target": requester.id})
		await self._notifications.create(
			requester.id,
			NotificationType.GENERIC,
			f"{recipient.username} accepted your friend request.",
			link=FRIENDS_LINK,
			actor_id=recipient.id,
			actor_username=recipient.username,
		)
		return _update(RESOLUTION_MESSAGES[RequestResolution.ACCEPTED], requester, recipient)

	async def decline_or_cancel(self, actor_id: str, other_id: str) -> FriendshipUpdate:
		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			actor, other = policy.require_pair(snapshot, actor_id, other_id)
			resolution = policy.apply_decline_or_cancel(actor, other)
			snapshot.put(actor, other)

		# No notification for declines and cancellations.
		audit.inc_request_resolved(resolution.value)
		audit.log_friend_event(f"friend_request_{resolution.value}", {"actor": actor.id, "target": other.id})
		return _update(RESOLUTION_MESSAGES[resolution], actor, other)

	async def remove_friend(self, actor_id: str, other_id: str) -> FriendshipUpdate:
		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			actor, other = policy.require_pair(snapshot, actor_id, other_id)
			policy.apply_remove(actor, other)
			snapshot.put(actor, other)

		audit.inc_friend_removed()
		audit.log_friend_event("friend_removed", {"actor": actor.id, "target": other.id})
		return _update("Friend removed.", actor, other)

	async def list_friends(self, user_id: str) -> List[UserPublic]:
		return await self._list_edge(user_id, "friend_ids")

	async def list_incoming(self, user_id: str) -> List[UserPublic]:
		return await self._list_edge(user_id, "pending_received")

	async def list_outgoing(self, user_id: str) -> List[UserPublic]:
		return await self._list_edge(user_id, "sent_requests")

	async def _list_edge(self, user_id: str, attr: str) -> List[UserPublic]:
		snapshot = UserSnapshot(await self._store.load(EntityType.USERS))
		user = snapshot.get(user_id)
		if user is None:
			raise UserNotFound()
		result: List[UserPublic] = []
		for other_id in getattr(user, attr):
			other = snapshot.get(other_id)
			if other is None:
				logger.warning("Dangling relationship edge", extra={"owner": user.id, "target": other_id})
				continue
			result.append(UserPublic.from_user(other))
		return result
