import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from huddle.api.deps import build_services
from huddle.infra.store import EntityType, JsonDocumentStore
from huddle.main import create_app
from huddle.settings import override


def _user_record(user_id, username=None, **fields):
    record = {
        "id": user_id,
        "username": username or user_id,
        "isGuest": False,
        "isAdmin": False,
        "friendIds": [],
        "pendingFriendRequestsReceived": [],
        "sentFriendRequests": [],
    }
    record.update(fields)
    return record


class _Clock:
    """Monotonic fake clock returning epoch milliseconds."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


@pytest.fixture
def make_user():
    return _user_record


@pytest.fixture
def test_settings(tmp_path):
    return override(data_dir=str(tmp_path / "data"), obs_enabled=False, admin_usernames=("root",))


@pytest.fixture
def store(test_settings):
    return JsonDocumentStore(test_settings.data_dir)


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def services(test_settings, clock):
    built = build_services(test_settings)
    built.notifications._clock = clock
    built.messages._clock = clock
    return built


@pytest.fixture
def seed(services):
    async def _seed(entity: EntityType, records):
        await services.store.save_all(entity, list(records))

    return _seed


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def api_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
