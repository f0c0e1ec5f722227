import asyncio
import json
import os

import pytest

from huddle.infra.store import EntityType, JsonDocumentStore, StorageCorrupted, StorageWriteFailed


@pytest.mark.asyncio
async def test_missing_document_is_initialised_empty(store):
    records = await store.load(EntityType.USERS)
    assert records == []
    path = store.path_for(EntityType.USERS)
    assert path.exists()
    assert json.loads(path.read_text()) == []


@pytest.mark.asyncio
async def test_empty_document_is_reset(store):
    store.data_dir.mkdir(parents=True)
    store.path_for(EntityType.ROOMS).write_text("   \n")
    assert await store.load(EntityType.ROOMS) == []
    assert json.loads(store.path_for(EntityType.ROOMS).read_text()) == []


@pytest.mark.asyncio
async def test_save_all_then_load_preserves_records(store):
    records = [{"id": "u1", "username": "alice"}, {"id": "u2", "username": "bob"}]
    await store.save_all(EntityType.USERS, records)
    assert await store.load("users") == records
    # Pretty-printed with two-space indentation.
    assert '\n  {\n    "id": "u1"' in store.path_for(EntityType.USERS).read_text()


@pytest.mark.asyncio
async def test_corrupt_document_reset_policy_moves_bytes_aside(store):
    store.data_dir.mkdir(parents=True)
    path = store.path_for(EntityType.NOTIFICATIONS)
    path.write_text("{not json")

    assert await store.load(EntityType.NOTIFICATIONS) == []
    backups = [name for name in os.listdir(store.data_dir) if name.startswith("notifications.json.corrupt-")]
    assert len(backups) == 1
    assert (store.data_dir / backups[0]).read_text() == "{not json"
    assert json.loads(path.read_text()) == []


@pytest.mark.asyncio
async def test_non_array_document_counts_as_corrupt(store):
    store.data_dir.mkdir(parents=True)
    store.path_for(EntityType.USERS).write_text('{"id": "u1"}')
    assert await store.load(EntityType.USERS) == []


@pytest.mark.asyncio
async def test_corrupt_document_strict_policy_raises(tmp_path):
    strict = JsonDocumentStore(tmp_path, corruption_policy="strict")
    strict.path_for(EntityType.USERS).write_text("[1, 2")
    with pytest.raises(StorageCorrupted) as exc_info:
        await strict.load(EntityType.USERS)
    assert exc_info.value.entity == "users"
    assert exc_info.value.reason == "storage_corrupted"
    # Strict mode leaves the file untouched.
    assert strict.path_for(EntityType.USERS).read_text() == "[1, 2"


def test_unknown_corruption_policy_rejected(tmp_path):
    with pytest.raises(ValueError):
        JsonDocumentStore(tmp_path, corruption_policy="ignore")


@pytest.mark.asyncio
async def test_failed_write_keeps_previous_document(store):
    await store.save_all(EntityType.USERS, [{"id": "u1"}])
    with pytest.raises(StorageWriteFailed) as exc_info:
        await store.save_all(EntityType.USERS, [{"id": "u2", "bad": object()}])
    assert exc_info.value.entity == "users"
    assert await store.load(EntityType.USERS) == [{"id": "u1"}]
    leftovers = [name for name in os.listdir(store.data_dir) if name.endswith(".tmp")]
    assert leftovers == []


@pytest.mark.asyncio
async def test_transaction_persists_changes(store):
    async with store.transaction(EntityType.ROOMS) as records:
        records.append({"id": "r1", "members": []})
    assert await store.load(EntityType.ROOMS) == [{"id": "r1", "members": []}]


@pytest.mark.asyncio
async def test_transaction_discards_changes_on_error(store):
    await store.save_all(EntityType.ROOMS, [{"id": "r1"}])
    with pytest.raises(RuntimeError):
        async with store.transaction(EntityType.ROOMS) as records:
            records.append({"id": "r2"})
            raise RuntimeError("boom")
    assert await store.load(EntityType.ROOMS) == [{"id": "r1"}]


@pytest.mark.asyncio
async def test_transaction_without_changes_does_not_write(store):
    await store.save_all(EntityType.NOTIFICATIONS, [])
    path = store.path_for(EntityType.NOTIFICATIONS)
    before = path.stat().st_mtime_ns
    os.utime(path, ns=(before - 10_000_000, before - 10_000_000))
    stamped = path.stat().st_mtime_ns
    async with store.transaction(EntityType.NOTIFICATIONS) as records:
        assert records == []
    assert path.stat().st_mtime_ns == stamped


@pytest.mark.asyncio
async def test_concurrent_transactions_do_not_lose_updates(store):
    async def append(n: int) -> None:
        async with store.transaction(EntityType.NOTIFICATIONS) as records:
            await asyncio.sleep(0)
            records.append({"id": f"n{n}"})

    await asyncio.gather(*(append(n) for n in range(20)))
    ids = {record["id"] for record in await store.load(EntityType.NOTIFICATIONS)}
    assert ids == {f"n{n}" for n in range(20)}
