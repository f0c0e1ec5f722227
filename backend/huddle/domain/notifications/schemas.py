"""Pydantic schemas for notifications."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from huddle.domain.common.schemas import CamelModel
from huddle.domain.notifications.models import Notification

NotificationKind = Literal["friend_request_received", "room_invite", "generic"]


class NotificationCreateRequest(CamelModel):
    user_id: str
    type: NotificationKind
    message: str = Field(..., max_length=500)
    link: Optional[str] = None
    actor_id: Optional[str] = None
    actor_username: Optional[str] = None
    room_id: Optional[str] = None
    room_name: Optional[str] = None


class MarkReadRequest(CamelModel):
    user_id: str


class NotificationOut(CamelModel):
    id: str
    user_id: str
    type: NotificationKind
    message: str
    link: Optional[str] = None
    timestamp: int
    is_read: bool
    actor_id: Optional[str] = None
    actor_username: Optional[str] = None
    room_id: Optional[str] = None
    room_name: Optional[str] = None

    @classmethod
    def from_model(cls, notification: Notification) -> "NotificationOut":
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type.value,
            message=notification.message,
            link=notification.link,
            timestamp=notification.timestamp,
            is_read=notification.is_read,
            actor_id=notification.actor_id,
            actor_username=notification.actor_username,
            room_id=notification.room_id,
            room_name=notification.room_name,
        )


class NotificationList(CamelModel):
    notifications: List[NotificationOut]
    unread_count: int


class MarkReadResult(CamelModel):
    changed: int
    message: str
