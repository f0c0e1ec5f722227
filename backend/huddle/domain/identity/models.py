"""Domain model for user accounts and their relationship edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

_KNOWN_KEYS = frozenset(
	{
		"id",
		"username",
		"avatar",
		"passwordHash",
		"isGuest",
		"isAdmin",
		"isTypingInRoomId",
		"friendIds",
		"pendingFriendRequestsReceived",
		"sentFriendRequests",
	}
)
# Plaintext credentials from older data files are never written back.
_DROPPED_KEYS = frozenset({"password"})


def _unique(values: Iterable[object] | None) -> List[str]:
	seen: List[str] = []
	for value in values or ():
		item = str(value)
		if item not in seen:
			seen.append(item)
	return seen


@dataclass(slots=True)
class User:
	"""Persisted user record.

	The three id lists behave as insertion-ordered sets: ``add_edge`` never
	duplicates an id and ``from_record`` drops duplicates found on disk.
	Keys this model does not know about are kept in ``extra`` and written back
	unchanged.
	"""

	id: str
	username: str
	avatar: Optional[str] = None
	password_hash: Optional[str] = None
	is_guest: bool = False
	is_admin: bool = False
	is_typing_in_room_id: Optional[str] = None
	friend_ids: List[str] = field(default_factory=list)
	pending_received: List[str] = field(default_factory=list)
	sent_requests: List[str] = field(default_factory=list)
	extra: Dict[str, Any] = field(default_factory=dict)

	@classmethod
	def from_record(cls, record: dict) -> "User":
		return cls(
			id=str(record["id"]),
			username=str(record.get("username") or ""),
			avatar=record.get("avatar"),
			password_hash=record.get("passwordHash"),
			is_guest=bool(record.get("isGuest", False)),
			is_admin=bool(record.get("isAdmin", False)),
			is_typing_in_room_id=record.get("isTypingInRoomId"),
			friend_ids=_unique(record.get("friendIds")),
			pending_received=_unique(record.get("pendingFriendRequestsReceived")),
			sent_requests=_unique(record.get("sentFriendRequests")),
			extra={
				key: value
				for key, value in record.items()
				if key not in _KNOWN_KEYS and key not in _DROPPED_KEYS
			},
		)

	def to_record(self) -> dict:
		record = {
			**self.extra,
			"id": self.id,
			"username": self.username,
			"isGuest": self.is_guest,
			"isAdmin": self.is_admin,
			"isTypingInRoomId": self.is_typing_in_room_id,
			"friendIds": list(self.friend_ids),
			"pendingFriendRequestsReceived": list(self.pending_received),
			"sentFriendRequests": list(self.sent_requests),
		}
		if self.avatar is not None:
			record["avatar"] = self.avatar
		if self.password_hash:
			record["passwordHash"] = self.password_hash
		return record

	def is_friend(self, other_id: str) -> bool:
		return other_id in self.friend_ids

	def has_sent_to(self, other_id: str) -> bool:
		return other_id in self.sent_requests

	def has_pending_from(self, other_id: str) -> bool:
		return other_id in self.pending_received


def add_edge(ids: List[str], other_id: str) -> None:
	if other_id not in ids:
		ids.append(other_id)


def drop_edge(ids: List[str], other_id: str) -> None:
	while other_id in ids:
		ids.remove(other_id)


class UserSnapshot:
	"""Index over the ``users`` document loaded for a single operation.

	Wraps the raw record list so services can look users up by id, mutate the
	models and write them back in place before the transaction persists.
	"""

	def __init__(self, records: list[dict]) -> None:
		self._records = records
		self._index = {
			str(record["id"]): pos for pos, record in enumerate(records) if record.get("id") is not None
		}
		self._loaded: dict[str, User] = {}

	def get(self, user_id: str) -> Optional[User]:
		user_id = str(user_id)
		if user_id in self._loaded:
			return self._loaded[user_id]
		pos = self._index.get(user_id)
		if pos is None:
			return None
		user = User.from_record(self._records[pos])
		self._loaded[user_id] = user
		return user

	def find_by_username(self, username: str) -> Optional[User]:
		wanted = username.strip().lower()
		for user_id, pos in self._index.items():
			if str(self._records[pos].get("username") or "").lower() == wanted:
				return self.get(user_id)
		return None

	def all(self) -> List[User]:
		return [user for user in (self.get(user_id) for user_id in self._index) if user is not None]

	def add(self, user: User) -> None:
		self._index[user.id] = len(self._records)
		self._records.append(user.to_record())
		self._loaded[user.id] = user

	def put(self, *users: User) -> None:
		for user in users:
			pos = self._index.get(user.id)
			if pos is None:
				self.add(user)
				continue
			self._records[pos] = user.to_record()
