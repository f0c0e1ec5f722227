"""Domain model for chat messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_KNOWN_KEYS = frozenset(
    {
        "id",
        "roomId",
        "userId",
        "username",
        "content",
        "timestamp",
        "isAIMessage",
        "isEdited",
        "editedTimestamp",
        "replyToMessageId",
        "replyToUsername",
    }
)


@dataclass(slots=True)
class Message:
    """A message posted to a room.

    ``username`` is the author's name at posting time and is not updated when
    the account changes. ``reply_to_username`` is denormalised the same way.
    """

    id: str
    room_id: str
    user_id: str
    username: str
    content: str
    timestamp: int  # epoch milliseconds
    is_ai_message: bool = False
    is_edited: bool = False
    edited_timestamp: Optional[int] = None
    reply_to_message_id: Optional[str] = None
    reply_to_username: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: dict) -> "Message":
        edited = record.get("editedTimestamp")
        return cls(
            id=str(record["id"]),
            room_id=str(record.get("roomId") or ""),
            user_id=str(record.get("userId") or ""),
            username=str(record.get("username") or ""),
            content=str(record.get("content") or ""),
            timestamp=int(record.get("timestamp") or 0),
            is_ai_message=bool(record.get("isAIMessage", False)),
            is_edited=bool(record.get("isEdited", False)),
            edited_timestamp=int(edited) if edited is not None else None,
            reply_to_message_id=record.get("replyToMessageId"),
            reply_to_username=record.get("replyToUsername"),
            extra={key: value for key, value in record.items() if key not in _KNOWN_KEYS},
        )

    def to_record(self) -> dict:
        record = {
            **self.extra,
            "id": self.id,
            "roomId": self.room_id,
            "userId": self.user_id,
            "username": self.username,
            "content": self.content,
            "timestamp": self.timestamp,
        }
        if self.is_ai_message:
            record["isAIMessage"] = True
        if self.is_edited:
            record["isEdited"] = True
        optional = {
            "editedTimestamp": self.edited_timestamp,
            "replyToMessageId": self.reply_to_message_id,
            "replyToUsername": self.reply_to_username,
        }
        record.update({key: value for key, value in optional.items() if value is not None})
        return record
