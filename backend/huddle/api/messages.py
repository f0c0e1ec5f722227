"""REST API surface for room messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from huddle.api.deps import Services, get_services
from huddle.domain.messages.schemas import MessageEditRequest, MessageList, MessageOut, MessagePostRequest

router = APIRouter(tags=["messages"])


@router.post("/rooms/{room_id}/messages", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def post_message(
	room_id: str,
	payload: MessagePostRequest,
	services: Services = Depends(get_services),
) -> MessageOut:
	message = await services.messages.post(
		room_id,
		payload.user_id,
		payload.content,
		reply_to_message_id=payload.reply_to_message_id,
	)
	return MessageOut.from_model(message)


@router.get("/rooms/{room_id}/messages", response_model=MessageList)
async def list_messages(
	room_id: str,
	user_id: str = Query(..., alias="userId"),
	services: Services = Depends(get_services),
) -> MessageList:
	messages = await services.messages.list_for_room(room_id, user_id)
	return MessageList(room_id=room_id, messages=[MessageOut.from_model(item) for item in messages])


@router.post("/messages/{message_id}/edit", response_model=MessageOut)
async def edit_message(
	message_id: str,
	payload: MessageEditRequest,
	services: Services = Depends(get_services),
) -> MessageOut:
	message = await services.messages.edit(message_id, payload.user_id, payload.content)
	return MessageOut.from_model(message)
