"""Domain-level exceptions for room messages."""

from __future__ import annotations

from huddle.domain.common.exceptions import HuddleError


class MessageError(HuddleError):
    """Base class for message errors."""


class MessageNotFound(MessageError):
    reason = "message_not_found"
    message = "Message not found in this room."


class NotRoomMember(MessageError):
    reason = "not_room_member"
    message = "You must be a member of this room to read or post messages."


class NotMessageAuthor(MessageError):
    reason = "not_message_author"
    message = "You can only edit your own messages."
