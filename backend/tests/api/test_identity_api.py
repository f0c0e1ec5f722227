import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_register_login_and_lookup(api_client: AsyncClient):
    response = await api_client.post("/auth/register", json={"username": "alice", "password": "hunter22"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Registration successful."
    user = body["user"]
    assert user["username"] == "alice"
    assert user["friendIds"] == []
    assert "passwordHash" not in user

    response = await api_client.post("/auth/login", json={"username": "Alice", "password": "hunter22"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]

    response = await api_client.post("/auth/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "invalid_credentials"

    response = await api_client.get(f"/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_duplicate_username_conflict(api_client: AsyncClient):
    await api_client.post("/auth/guest", json={"username": "bob"})
    response = await api_client.post("/auth/register", json={"username": "BOB", "password": "x"})
    assert response.status_code == 409
    body = response.json()
    assert body["detail"] == "username_taken"
    assert body["request_id"]


@pytest.mark.asyncio
async def test_search_and_typing(api_client: AsyncClient):
    alice = (await api_client.post("/auth/guest", json={"username": "alice"})).json()["user"]
    await api_client.post("/auth/guest", json={"username": "alicia"})

    response = await api_client.get("/users/search", params={"query": "ali", "currentUserId": alice["id"]})
    assert response.status_code == 200
    assert [user["username"] for user in response.json()["users"]] == ["alicia"]

    response = await api_client.post(f"/users/{alice['id']}/typing", json={"roomId": "r1"})
    assert response.status_code == 200
    assert response.json()["isTypingInRoomId"] == "r1"


@pytest.mark.asyncio
async def test_unknown_user_is_404_with_request_id(api_client: AsyncClient):
    response = await api_client.get("/users/ghost", headers={"X-Request-Id": "req-123"})
    assert response.status_code == 404
    assert response.json() == {"detail": "not_found", "message": "User not found.", "request_id": "req-123"}
    assert response.headers["X-Request-Id"] == "req-123"


@pytest.mark.asyncio
async def test_validation_errors_are_reported(api_client: AsyncClient):
    response = await api_client.post("/auth/register", json={"password": "x"})
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "validation_error"
    assert body["errors"][0]["loc"][-1] == "username"
