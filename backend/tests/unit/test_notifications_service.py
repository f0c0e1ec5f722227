import pytest

from huddle.domain.notifications import NotificationNotFoundOrForbidden, NotificationService, NotificationType
from huddle.infra.store import EntityType


@pytest.mark.asyncio
async def test_create_appends_and_fetch_returns_newest_first(services):
    notifications = services.notifications
    first = await notifications.create("u1", NotificationType.GENERIC, "first")
    second = await notifications.create("u1", "room_invite", "second", room_id="r1", room_name="Lobby")
    await notifications.create("u2", NotificationType.GENERIC, "other user")

    fetched = await notifications.fetch_for_user("u1")
    assert [item.id for item in fetched] == [second.id, first.id]
    assert fetched[0].room_name == "Lobby"
    assert fetched[0].timestamp > fetched[1].timestamp
    assert await notifications.unread_count("u1") == 2


@pytest.mark.asyncio
async def test_equal_timestamps_keep_insertion_order(store):
    notifications = NotificationService(store, clock=lambda: 42)
    first = await notifications.create("u1", NotificationType.GENERIC, "a")
    second = await notifications.create("u1", NotificationType.GENERIC, "b")
    fetched = await notifications.fetch_for_user("u1")
    assert [item.id for item in fetched] == [first.id, second.id]


@pytest.mark.asyncio
async def test_optional_fields_are_omitted_on_disk(services):
    await services.notifications.create("u1", NotificationType.GENERIC, "hello")
    (record,) = await services.store.load(EntityType.NOTIFICATIONS)
    assert set(record) == {"id", "userId", "type", "message", "timestamp", "isRead"}


@pytest.mark.asyncio
async def test_mark_read_only_for_owner(services):
    notification = await services.notifications.create("u1", NotificationType.GENERIC, "hello")
    with pytest.raises(NotificationNotFoundOrForbidden):
        await services.notifications.mark_read(notification.id, "u2")
    with pytest.raises(NotificationNotFoundOrForbidden):
        await services.notifications.mark_read("missing", "u1")

    updated = await services.notifications.mark_read(notification.id, "u1")
    assert updated.is_read is True
    assert await services.notifications.unread_count("u1") == 0


@pytest.mark.asyncio
async def test_mark_all_read_only_touches_one_user(services):
    await services.notifications.create("u1", NotificationType.GENERIC, "a")
    await services.notifications.create("u1", NotificationType.GENERIC, "b")
    await services.notifications.create("u2", NotificationType.GENERIC, "c")

    result = await services.notifications.mark_all_read("u1")
    assert result.changed == 2
    assert result.message == "All notifications marked as read."
    assert await services.notifications.unread_count("u1") == 0
    assert await services.notifications.unread_count("u2") == 1


@pytest.mark.asyncio
async def test_mark_all_read_with_nothing_unread_is_noop(services):
    path = services.store.path_for(EntityType.NOTIFICATIONS)
    await services.store.save_all(EntityType.NOTIFICATIONS, [])
    before = path.read_text()

    result = await services.notifications.mark_all_read("u1")
    assert result.changed == 0
    assert result.message == "No unread notifications to mark."
    assert path.read_text() == before


@pytest.mark.asyncio
async def test_unknown_type_rejected(services):
    with pytest.raises(ValueError):
        await services.notifications.create("u1", "party_invite", "nope")
    assert await services.store.load(EntityType.NOTIFICATIONS) == []
