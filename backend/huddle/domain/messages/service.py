"""Room message log: append, list oldest first, author edits."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

import ulid

from huddle.domain.identity.exceptions import UserNotFound
from huddle.domain.identity.models import UserSnapshot
from huddle.domain.messages.exceptions import MessageNotFound, NotMessageAuthor, NotRoomMember
from huddle.domain.messages.models import Message
from huddle.domain.rooms.exceptions import RoomNotFound
from huddle.domain.rooms.models import Room
from huddle.infra.store import EntityType, JsonDocumentStore
from huddle.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class MessageService:
    """Messages document operations.

    Room membership and the author's username are read from snapshots taken
    before the messages lock is acquired, so no other document lock is ever
    held at the same time.
    """

    def __init__(self, store: JsonDocumentStore, *, clock: Callable[[], int] = _now_ms) -> None:
        self._store = store
        self._clock = clock

    async def _room(self, room_id: str) -> Room:
        records = await self._store.load(EntityType.ROOMS)
        for record in records:
            if str(record.get("id")) == str(room_id):
                return Room.from_record(record)
        raise RoomNotFound()

    async def post(
        self,
        room_id: str,
        user_id: str,
        content: str,
        *,
        reply_to_message_id: Optional[str] = None,
    ) -> Message:
        room = await self._room(room_id)
        if not room.has_member(user_id):
            raise NotRoomMember()
        author = UserSnapshot(await self._store.load(EntityType.USERS)).get(user_id)
        if author is None:
            raise UserNotFound()

        message = Message(
            id=str(ulid.new()),
            room_id=room.id,
            user_id=author.id,
            username=author.username,
            content=content,
            timestamp=self._clock(),
            reply_to_message_id=reply_to_message_id,
        )
        async with self._store.transaction(EntityType.MESSAGES) as records:
            if reply_to_message_id is not None:
                target = next(
                    (
                        r
                        for r in records
                        if str(r.get("id")) == str(reply_to_message_id) and str(r.get("roomId")) == room.id
                    ),
                    None,
                )
                if target is None:
                    raise MessageNotFound()
                message.reply_to_username = target.get("username")
            records.append(message.to_record())
        obs_metrics.inc_message_posted("reply" if reply_to_message_id else "message")
        logger.info("message_posted", extra={"room": room.id, "author": author.id})
        return message

    async def list_for_room(self, room_id: str, user_id: str) -> List[Message]:
        """Return the room's messages oldest first.

        Public rooms are readable by anyone; private and DM rooms only by
        their members. Equal timestamps keep insertion order.
        """
        room = await self._room(room_id)
        if room.is_private and not room.has_member(user_id):
            raise NotRoomMember()
        records = await self._store.load(EntityType.MESSAGES)
        mine = [Message.from_record(r) for r in records if str(r.get("roomId")) == room.id]
        return sorted(mine, key=lambda m: m.timestamp)

    async def edit(self, message_id: str, user_id: str, content: str) -> Message:
        async with self._store.transaction(EntityType.MESSAGES) as records:
            for pos, record in enumerate(records):
                if str(record.get("id")) != str(message_id):
                    continue
                message = Message.from_record(record)
                if message.user_id != str(user_id):
                    raise NotMessageAuthor()
                if message.content == content:
                    return message
                message.content = content
                message.is_edited = True
                message.edited_timestamp = self._clock()
                records[pos] = message.to_record()
                break
            else:
                raise MessageNotFound()
        logger.info("message_edited", extra={"message_id": message.id, "author": message.user_id})
        return message
