"""Domain model for user notifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NotificationType(str, Enum):
    FRIEND_REQUEST_RECEIVED = "friend_request_received"
    ROOM_INVITE = "room_invite"
    GENERIC = "generic"


FRIENDS_LINK = "/chat/friends"


def room_link(room_id: str) -> str:
    return f"/chat?roomId={room_id}"


@dataclass(slots=True)
class Notification:
    id: str
    user_id: str
    type: NotificationType
    message: str
    timestamp: int  # epoch milliseconds
    is_read: bool = False
    link: Optional[str] = None
    actor_id: Optional[str] = None
    actor_username: Optional[str] = None
    room_id: Optional[str] = None
    room_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Notification":
        return cls(
            id=str(record["id"]),
            user_id=str(record["userId"]),
            type=NotificationType(record.get("type", NotificationType.GENERIC.value)),
            message=str(record.get("message") or ""),
            timestamp=int(record.get("timestamp") or 0),
            is_read=bool(record.get("isRead", False)),
            link=record.get("link"),
            actor_id=record.get("actorId"),
            actor_username=record.get("actorUsername"),
            room_id=record.get("roomId"),
            room_name=record.get("roomName"),
        )

    def to_record(self) -> dict:
        record = {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "isRead": self.is_read,
        }
        optional = {
            "link": self.link,
            "actorId": self.actor_id,
            "actorUsername": self.actor_username,
            "roomId": self.room_id,
            "roomName": self.room_name,
        }
        record.update({key: value for key, value in optional.items() if value is not None})
        return record
