"""REST API surface for friend requests & friendships."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from huddle.api.deps import Services, get_services
from huddle.domain.social.schemas import (
	FriendList,
	FriendRequestInput,
	FriendshipUpdate,
	ManageFriendRequestInput,
)

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("/requests/send", response_model=FriendshipUpdate)
async def send_request(payload: FriendRequestInput, services: Services = Depends(get_services)) -> FriendshipUpdate:
	return await services.relationships.send_request(payload.requester_id, payload.recipient_id)


@router.post("/requests/accept", response_model=FriendshipUpdate)
async def accept_request(payload: FriendRequestInput, services: Services = Depends(get_services)) -> FriendshipUpdate:
	"""``requesterId`` is the user who sent the request, ``recipientId`` the one accepting it."""
	return await services.relationships.accept_request(payload.requester_id, payload.recipient_id)


@router.post("/requests/decline-or-cancel", response_model=FriendshipUpdate)
async def decline_or_cancel(
	payload: ManageFriendRequestInput,
	services: Services = Depends(get_services),
) -> FriendshipUpdate:
	return await services.relationships.decline_or_cancel(payload.user_id, payload.other_user_id)


@router.post("/remove", response_model=FriendshipUpdate)
async def remove_friend(
	payload: ManageFriendRequestInput,
	services: Services = Depends(get_services),
) -> FriendshipUpdate:
	return await services.relationships.remove_friend(payload.user_id, payload.other_user_id)


@router.get("/{user_id}", response_model=FriendList)
async def list_friends(user_id: str, services: Services = Depends(get_services)) -> FriendList:
	return FriendList(users=await services.relationships.list_friends(user_id))


@router.get("/{user_id}/incoming", response_model=FriendList)
async def list_incoming(user_id: str, services: Services = Depends(get_services)) -> FriendList:
	return FriendList(users=await services.relationships.list_incoming(user_id))


@router.get("/{user_id}/outgoing", response_model=FriendList)
async def list_outgoing(user_id: str, services: Services = Depends(get_services)) -> FriendList:
	return FriendList(users=await services.relationships.list_outgoing(user_id))
