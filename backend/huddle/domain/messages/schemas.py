"""Pydantic schemas for room messages."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from huddle.domain.common.schemas import CamelModel
from huddle.domain.messages.models import Message

MAX_CONTENT_LENGTH = 2000


def _clean_content(value: str) -> str:
    if not value.strip():
        raise ValueError("Message cannot be empty.")
    return value.strip()


class MessagePostRequest(CamelModel):
    user_id: str
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
    reply_to_message_id: Optional[str] = None

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _clean_content(value)


class MessageEditRequest(CamelModel):
    user_id: str
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _clean_content(value)


class MessageOut(CamelModel):
    id: str
    room_id: str
    user_id: str
    username: str
    content: str
    timestamp: int
    is_ai_message: bool = Field(False, alias="isAIMessage")
    is_edited: bool = False
    edited_timestamp: Optional[int] = None
    reply_to_message_id: Optional[str] = None
    reply_to_username: Optional[str] = None

    @classmethod
    def from_model(cls, message: Message) -> "MessageOut":
        return cls(
            id=message.id,
            room_id=message.room_id,
            user_id=message.user_id,
            username=message.username,
            content=message.content,
            timestamp=message.timestamp,
            is_ai_message=message.is_ai_message,
            is_edited=message.is_edited,
            edited_timestamp=message.edited_timestamp,
            reply_to_message_id=message.reply_to_message_id,
            reply_to_username=message.reply_to_username,
        )


class MessageList(CamelModel):
    room_id: str
    messages: List[MessageOut]
