"""Pydantic schemas for accounts."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from huddle.domain.common.schemas import CamelModel
from huddle.domain.identity.models import User


class RegisterRequest(CamelModel):
	username: str = Field(..., max_length=64)
	password: Optional[str] = Field(default=None, max_length=256)


class GuestRequest(CamelModel):
	username: str = Field(..., max_length=64)


class LoginRequest(CamelModel):
	username: str
	password: Optional[str] = None


class TypingStatusRequest(CamelModel):
	room_id: Optional[str] = None


class UserPublic(CamelModel):
	"""User view returned to clients; never carries the password hash."""

	id: str
	username: str
	avatar: Optional[str] = None
	is_guest: bool = False
	is_admin: bool = False
	is_typing_in_room_id: Optional[str] = None
	friend_ids: List[str] = Field(default_factory=list)
	pending_friend_requests_received: List[str] = Field(default_factory=list)
	sent_friend_requests: List[str] = Field(default_factory=list)

	@classmethod
	def from_user(cls, user: User) -> "UserPublic":
		return cls(
			id=user.id,
			username=user.username,
			avatar=user.avatar,
			is_guest=user.is_guest,
			is_admin=user.is_admin,
			is_typing_in_room_id=user.is_typing_in_room_id,
			friend_ids=list(user.friend_ids),
			pending_friend_requests_received=list(user.pending_received),
			sent_friend_requests=list(user.sent_requests),
		)


class AuthResponse(CamelModel):
	user: UserPublic
	message: str


class UserSearchResponse(CamelModel):
	users: List[UserPublic]
