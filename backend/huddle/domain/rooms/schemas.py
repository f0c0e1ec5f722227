"""Pydantic schemas for the rooms API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from huddle.domain.common.schemas import CamelModel
from huddle.domain.rooms.models import Room


class RoomCreateRequest(CamelModel):
    owner_id: str
    name: str = Field(..., min_length=1, max_length=80)
    is_private: bool = False

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Room name cannot be empty.")
        return value.strip()


class RoomJoinRequest(CamelModel):
    user_id: str


class RoomInviteRequest(CamelModel):
    inviter_user_id: str
    invitee_user_id: str


class DirectMessageOpenRequest(CamelModel):
    user_id: str
    other_user_id: str


class RoomLeaveRequest(CamelModel):
    user_id: str


class RoomOut(CamelModel):
    id: str
    name: str
    is_private: bool
    members: List[str]
    owner_id: Optional[str] = None

    @classmethod
    def from_room(cls, room: Room) -> "RoomOut":
        return cls(
            id=room.id,
            name=room.name,
            is_private=room.is_private,
            members=list(room.members),
            owner_id=room.owner_id,
        )


class RoomUpdate(CamelModel):
    message: str
    updated_room: RoomOut


class RoomList(CamelModel):
    rooms: List[RoomOut]
