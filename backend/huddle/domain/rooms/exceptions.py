"""Domain-level exceptions for rooms & membership."""

from __future__ import annotations

from huddle.domain.common.exceptions import HuddleError


class RoomError(HuddleError):
	"""Base class for room errors."""


class RoomNotFound(RoomError):
	reason = "room_not_found"
	message = "Room not found."


class RoomIsPublic(RoomError):
	reason = "room_is_public"
	message = "This room is public. Users can join directly."


class RoomIsPrivate(RoomError):
	reason = "room_is_private"
	message = "This room is private and can only be joined by invitation."


class NotAuthorized(RoomError):
	reason = "not_authorized"
	message = "You are not the owner or an admin, and cannot invite users to this private room."


class AlreadyMember(RoomError):
	reason = "already_member"
	message = "User is already a member of this room."


class NotMember(RoomError):
	reason = "not_member"
	message = "You are not a member of this DM room."


class NotDirectMessageRoom(RoomError):
	reason = "not_dm_room"
	message = "This action is only for DM rooms."


class SelfDirectMessage(RoomError):
	reason = "self_dm"
	message = "You cannot start a direct message with yourself."
