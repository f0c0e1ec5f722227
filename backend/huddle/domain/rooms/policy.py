"""Policy helpers for room membership."""

from __future__ import annotations

from typing import Optional

from huddle.domain.identity.models import User
from huddle.domain.rooms import models
from huddle.domain.rooms.exceptions import (
	AlreadyMember,
	NotAuthorized,
	NotDirectMessageRoom,
	NotMember,
	RoomIsPrivate,
	RoomIsPublic,
	SelfDirectMessage,
)


def can_manage_members(room: models.Room, actor_id: str, actor: Optional[User]) -> bool:
	"""Owners and admins may add members to a private room."""
	if room.owner_id is not None and room.owner_id == str(actor_id):
		return True
	return bool(actor and actor.is_admin)


def ensure_can_invite(room: models.Room, inviter_id: str, inviter: Optional[User], invitee_id: str) -> None:
	if not room.is_private:
		raise RoomIsPublic()
	if not can_manage_members(room, inviter_id, inviter):
		raise NotAuthorized()
	if room.has_member(invitee_id):
		raise AlreadyMember()


def ensure_can_join(room: models.Room) -> None:
	if room.is_private:
		raise RoomIsPrivate()


def ensure_can_leave_dm(room: models.Room, user_id: str) -> None:
	if not room.is_direct_message():
		raise NotDirectMessageRoom()
	if not room.has_member(user_id):
		raise NotMember()


def guard_not_self_dm(user_id: str, other_id: str) -> None:
	if str(user_id) == str(other_id):
		raise SelfDirectMessage()


def is_visible_to(room: models.Room, user_id: str) -> bool:
	return not room.is_private or room.has_member(user_id)
