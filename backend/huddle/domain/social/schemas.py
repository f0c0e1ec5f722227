"""Pydantic schemas for friend requests & friendships."""

from __future__ import annotations

from typing import List

from huddle.domain.common.schemas import CamelModel
from huddle.domain.identity.schemas import UserPublic


class FriendRequestInput(CamelModel):
	requester_id: str
	recipient_id: str


class ManageFriendRequestInput(CamelModel):
	user_id: str
	other_user_id: str


class FriendshipUpdate(CamelModel):
	"""Result of a relationship operation with both users' updated state.

	For decline/cancel/remove, ``updated_requester`` is the acting user and
	``updated_recipient`` the other user.
	"""

	message: str
	updated_requester: UserPublic
	updated_recipient: UserPublic


class FriendList(CamelModel):
	users: List[UserPublic]
