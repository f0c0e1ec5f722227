"""Rooms domain exports."""

from .exceptions import (  # noqa: F401
	AlreadyMember,
	NotAuthorized,
	NotDirectMessageRoom,
	NotMember,
	RoomError,
	RoomIsPrivate,
	RoomIsPublic,
	RoomNotFound,
	SelfDirectMessage,
)
from .models import Room, direct_message_room_id  # noqa: F401
from .service import RoomService  # noqa: F401
