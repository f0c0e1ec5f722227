"""Service wiring shared by the API routers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from huddle.domain.identity import IdentityService
from huddle.domain.messages import MessageService
from huddle.domain.notifications import NotificationService
from huddle.domain.rooms import RoomService
from huddle.domain.social import RelationshipService
from huddle.infra.store import JsonDocumentStore
from huddle.settings import Settings


@dataclass(slots=True)
class Services:
	store: JsonDocumentStore
	identity: IdentityService
	messages: MessageService
	notifications: NotificationService
	relationships: RelationshipService
	rooms: RoomService


def build_services(config: Settings) -> Services:
	"""One store instance per process; all services share it and its locks."""
	store = JsonDocumentStore(config.data_dir, corruption_policy=config.storage_corruption_policy)
	notifications = NotificationService(store)
	return Services(
		store=store,
		identity=IdentityService(store, admin_usernames=config.admin_username_set()),
		messages=MessageService(store),
		notifications=notifications,
		relationships=RelationshipService(store, notifications),
		rooms=RoomService(store, notifications),
	)


def get_services(request: Request) -> Services:
	return request.app.state.services


def get_settings(request: Request) -> Settings:
	return request.app.state.settings
