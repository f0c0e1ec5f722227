"""REST API surface for the notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from huddle.api.deps import Services, get_services
from huddle.domain.notifications.schemas import (
	MarkReadRequest,
	MarkReadResult,
	NotificationCreateRequest,
	NotificationList,
	NotificationOut,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
async def create_notification(
	payload: NotificationCreateRequest,
	services: Services = Depends(get_services),
) -> NotificationOut:
	notification = await services.notifications.create(
		payload.user_id,
		payload.type,
		payload.message,
		link=payload.link,
		actor_id=payload.actor_id,
		actor_username=payload.actor_username,
		room_id=payload.room_id,
		room_name=payload.room_name,
	)
	return NotificationOut.from_model(notification)


@router.post("/read-all", response_model=MarkReadResult)
async def mark_all_read(payload: MarkReadRequest, services: Services = Depends(get_services)) -> MarkReadResult:
	return await services.notifications.mark_all_read(payload.user_id)


@router.get("/{user_id}", response_model=NotificationList)
async def fetch_notifications(user_id: str, services: Services = Depends(get_services)) -> NotificationList:
	notifications = await services.notifications.fetch_for_user(user_id)
	return NotificationList(
		notifications=[NotificationOut.from_model(item) for item in notifications],
		unread_count=sum(1 for item in notifications if not item.is_read),
	)


@router.post("/{notification_id}/read", response_model=NotificationOut)
async def mark_read(
	notification_id: str,
	payload: MarkReadRequest,
	services: Services = Depends(get_services),
) -> NotificationOut:
	notification = await services.notifications.mark_read(notification_id, payload.user_id)
	return NotificationOut.from_model(notification)
