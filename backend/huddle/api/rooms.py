"""REST API surface for rooms, invites and direct messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from huddle.api.deps import Services, get_services
from huddle.domain.rooms.schemas import (
	DirectMessageOpenRequest,
	RoomCreateRequest,
	RoomInviteRequest,
	RoomJoinRequest,
	RoomLeaveRequest,
	RoomList,
	RoomOut,
	RoomUpdate,
)

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("/create", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
async def create_room(payload: RoomCreateRequest, services: Services = Depends(get_services)) -> RoomOut:
	room = await services.rooms.create_room(payload.owner_id, payload.name, payload.is_private)
	return RoomOut.from_room(room)


@router.post("/dm/open", response_model=RoomOut)
async def open_direct_message(
	payload: DirectMessageOpenRequest,
	services: Services = Depends(get_services),
) -> RoomOut:
	room = await services.rooms.open_direct_message(payload.user_id, payload.other_user_id)
	return RoomOut.from_room(room)


@router.get("", response_model=RoomList)
async def list_rooms(
	user_id: str = Query(..., alias="userId"),
	services: Services = Depends(get_services),
) -> RoomList:
	rooms = await services.rooms.list_rooms_for_user(user_id)
	return RoomList(rooms=[RoomOut.from_room(room) for room in rooms])


@router.get("/{room_id}", response_model=RoomOut)
async def get_room(room_id: str, services: Services = Depends(get_services)) -> RoomOut:
	return RoomOut.from_room(await services.rooms.get_room(room_id))


@router.post("/{room_id}/join", response_model=RoomUpdate)
async def join_room(
	room_id: str,
	payload: RoomJoinRequest,
	services: Services = Depends(get_services),
) -> RoomUpdate:
	room = await services.rooms.join_room(room_id, payload.user_id)
	return RoomUpdate(message="Joined room.", updated_room=RoomOut.from_room(room))


@router.post("/{room_id}/invite", response_model=RoomUpdate)
async def invite(
	room_id: str,
	payload: RoomInviteRequest,
	services: Services = Depends(get_services),
) -> RoomUpdate:
	room = await services.rooms.invite(room_id, payload.inviter_user_id, payload.invitee_user_id)
	return RoomUpdate(message="User invited successfully.", updated_room=RoomOut.from_room(room))


@router.post("/{room_id}/leave-dm", response_model=RoomUpdate)
async def leave_direct_message(
	room_id: str,
	payload: RoomLeaveRequest,
	services: Services = Depends(get_services),
) -> RoomUpdate:
	room = await services.rooms.leave_direct_message(room_id, payload.user_id)
	return RoomUpdate(message="You have left the DM chat.", updated_room=RoomOut.from_room(room))
