"""Notification fan-out: append-only per-recipient queue with read flags."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

import ulid

from huddle.domain.notifications.exceptions import NotificationNotFoundOrForbidden
from huddle.domain.notifications.models import Notification, NotificationType
from huddle.domain.notifications.schemas import MarkReadResult
from huddle.infra.store import EntityType, JsonDocumentStore
from huddle.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class NotificationService:
    def __init__(self, store: JsonDocumentStore, *, clock: Callable[[], int] = _now_ms) -> None:
        self._store = store
        self._clock = clock

    async def create(
        self,
        user_id: str,
        type: NotificationType | str,
        message: str,
        *,
        link: Optional[str] = None,
        actor_id: Optional[str] = None,
        actor_username: Optional[str] = None,
        room_id: Optional[str] = None,
        room_name: Optional[str] = None,
    ) -> Notification:
        """Append a notification for ``user_id``; never merges with existing ones."""
        notification = Notification(
            id=str(ulid.new()),
            user_id=str(user_id),
            type=NotificationType(type),
            message=message,
            timestamp=self._clock(),
            link=link,
            actor_id=actor_id,
            actor_username=actor_username,
            room_id=room_id,
            room_name=room_name,
        )
        async with self._store.transaction(EntityType.NOTIFICATIONS) as records:
            records.append(notification.to_record())
        obs_metrics.inc_notification_created(notification.type.value)
        logger.info(
            "notification_created",
            extra={"recipient": notification.user_id, "kind": notification.type.value},
        )
        return notification

    async def fetch_for_user(self, user_id: str) -> List[Notification]:
        """Return the user's notifications newest first.

        ``sorted`` is stable with ``reverse=True``, so equal timestamps keep
        insertion order.
        """
        records = await self._store.load(EntityType.NOTIFICATIONS)
        mine = [Notification.from_record(r) for r in records if str(r.get("userId")) == str(user_id)]
        return sorted(mine, key=lambda n: n.timestamp, reverse=True)

    async def unread_count(self, user_id: str) -> int:
        records = await self._store.load(EntityType.NOTIFICATIONS)
        return sum(1 for r in records if str(r.get("userId")) == str(user_id) and not r.get("isRead", False))

    async def mark_read(self, notification_id: str, user_id: str) -> Notification:
        async with self._store.transaction(EntityType.NOTIFICATIONS) as records:
            for pos, record in enumerate(records):
                if str(record.get("id")) == str(notification_id) and str(record.get("userId")) == str(user_id):
                    notification = Notification.from_record(record)
                    notification.is_read = True
                    records[pos] = notification.to_record()
                    return notification
            raise NotificationNotFoundOrForbidden()

    async def mark_all_read(self, user_id: str) -> MarkReadResult:
        changed = 0
        async with self._store.transaction(EntityType.NOTIFICATIONS) as records:
            for record in records:
                if str(record.get("userId")) == str(user_id) and not record.get("isRead", False):
                    record["isRead"] = True
                    changed += 1
        if not changed:
            return MarkReadResult(changed=0, message="No unread notifications to mark.")
        return MarkReadResult(changed=changed, message="All notifications marked as read.")
