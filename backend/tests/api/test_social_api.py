import pytest
from httpx import AsyncClient


async def _guest(client: AsyncClient, username: str) -> str:
    response = await client.post("/auth/guest", json={"username": username})
    assert response.status_code == 200
    return response.json()["user"]["id"]


@pytest.mark.asyncio
async def test_friend_request_lifecycle(api_client: AsyncClient):
    alice = await _guest(api_client, "alice")
    bob = await _guest(api_client, "bob")

    response = await api_client.post("/friends/requests/send", json={"requesterId": alice, "recipientId": bob})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Friend request sent."
    assert body["updatedRequester"]["sentFriendRequests"] == [bob]
    assert body["updatedRecipient"]["pendingFriendRequestsReceived"] == [alice]

    response = await api_client.post("/friends/requests/send", json={"requesterId": alice, "recipientId": bob})
    assert response.status_code == 409
    assert response.json()["detail"] == "already_requested"

    response = await api_client.get(f"/friends/{bob}/incoming")
    assert [user["id"] for user in response.json()["users"]] == [alice]
    response = await api_client.get(f"/friends/{alice}/outgoing")
    assert [user["id"] for user in response.json()["users"]] == [bob]

    response = await api_client.post("/friends/requests/accept", json={"requesterId": alice, "recipientId": bob})
    assert response.status_code == 200
    assert response.json()["updatedRecipient"]["friendIds"] == [alice]

    response = await api_client.get(f"/friends/{alice}")
    assert [user["username"] for user in response.json()["users"]] == ["bob"]

    response = await api_client.post("/friends/remove", json={"userId": bob, "otherUserId": alice})
    assert response.status_code == 200
    response = await api_client.post("/friends/remove", json={"userId": bob, "otherUserId": alice})
    assert response.status_code == 409
    assert response.json()["detail"] == "not_friends"


@pytest.mark.asyncio
async def test_decline_or_cancel_and_errors(api_client: AsyncClient):
    alice = await _guest(api_client, "alice")
    bob = await _guest(api_client, "bob")

    response = await api_client.post("/friends/requests/send", json={"requesterId": alice, "recipientId": alice})
    assert response.status_code == 409
    assert response.json()["detail"] == "self_request"

    response = await api_client.post("/friends/requests/send", json={"requesterId": alice, "recipientId": "ghost"})
    assert response.status_code == 404

    await api_client.post("/friends/requests/send", json={"requesterId": alice, "recipientId": bob})
    response = await api_client.post("/friends/requests/send", json={"requesterId": bob, "recipientId": alice})
    assert response.status_code == 409
    assert response.json()["detail"] == "reciprocal_pending"

    response = await api_client.post(
        "/friends/requests/decline-or-cancel", json={"userId": bob, "otherUserId": alice}
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Friend request declined."

    response = await api_client.post(
        "/friends/requests/decline-or-cancel", json={"userId": bob, "otherUserId": alice}
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "no_active_request"

    response = await api_client.post("/friends/requests/accept", json={"requesterId": alice, "recipientId": bob})
    assert response.status_code == 409
    assert response.json()["detail"] == "no_pending_request"
