"""Domain model for chat rooms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DM_PREFIX = "dm_"
_KNOWN_KEYS = frozenset({"id", "name", "isPrivate", "members", "ownerId"})


def direct_message_room_id(user_a: str, user_b: str) -> str:
    first, second = sorted((str(user_a), str(user_b)))
    return f"{DM_PREFIX}{first}_{second}"


@dataclass(slots=True)
class Room:
    """Persisted representation of a chat room.

    ``members`` is an insertion-ordered set of user ids; the owner, when
    present, is always a member.
    Unknown keys round-trip through ``extra``.
    """

    id: str
    name: str
    is_private: bool
    members: List[str] = field(default_factory=list)
    owner_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: dict) -> "Room":
        members: List[str] = []
        for member in record.get("members") or ():
            if str(member) not in members:
                members.append(str(member))
        owner_id = record.get("ownerId")
        return cls(
            id=str(record["id"]),
            name=str(record.get("name") or ""),
            is_private=bool(record.get("isPrivate", False)),
            members=members,
            owner_id=str(owner_id) if owner_id is not None else None,
            extra={key: value for key, value in record.items() if key not in _KNOWN_KEYS},
        )

    def to_record(self) -> dict:
        record = {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "isPrivate": self.is_private,
            "members": list(self.members),
        }
        if self.owner_id is not None:
            record["ownerId"] = self.owner_id
        return record

    def is_direct_message(self) -> bool:
        return self.id.startswith(DM_PREFIX)

    def has_member(self, user_id: str) -> bool:
        return str(user_id) in self.members

    def add_member(self, user_id: str) -> None:
        if str(user_id) not in self.members:
            self.members.append(str(user_id))

    def remove_member(self, user_id: str) -> None:
        self.members = [member for member in self.members if member != str(user_id)]
