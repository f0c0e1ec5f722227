"""REST API surface for accounts, login and user lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from huddle.api.deps import Services, get_services
from huddle.domain.identity.schemas import (
	AuthResponse,
	GuestRequest,
	LoginRequest,
	RegisterRequest,
	TypingStatusRequest,
	UserPublic,
	UserSearchResponse,
)

router = APIRouter(tags=["identity"])


@router.post("/auth/register", response_model=AuthResponse)
async def register(payload: RegisterRequest, services: Services = Depends(get_services)) -> AuthResponse:
	user = await services.identity.register(payload.username, payload.password)
	return AuthResponse(user=UserPublic.from_user(user), message="Registration successful.")


@router.post("/auth/guest", response_model=AuthResponse)
async def create_guest(payload: GuestRequest, services: Services = Depends(get_services)) -> AuthResponse:
	user = await services.identity.create_guest(payload.username)
	return AuthResponse(user=UserPublic.from_user(user), message="Guest account created.")


@router.post("/auth/login", response_model=AuthResponse)
async def login(payload: LoginRequest, services: Services = Depends(get_services)) -> AuthResponse:
	user = await services.identity.login(payload.username, payload.password)
	return AuthResponse(user=UserPublic.from_user(user), message="Login successful.")


@router.get("/users/search", response_model=UserSearchResponse)
async def search_users(
	query: str = Query(default="", max_length=64),
	current_user_id: str = Query(..., alias="currentUserId"),
	services: Services = Depends(get_services),
) -> UserSearchResponse:
	users = await services.identity.search(query, current_user_id)
	return UserSearchResponse(users=[UserPublic.from_user(user) for user in users])


@router.get("/users/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, services: Services = Depends(get_services)) -> UserPublic:
	return UserPublic.from_user(await services.identity.get_user(user_id))


@router.post("/users/{user_id}/typing", response_model=UserPublic)
async def set_typing(
	user_id: str,
	payload: TypingStatusRequest,
	services: Services = Depends(get_services),
) -> UserPublic:
	return UserPublic.from_user(await services.identity.set_typing(user_id, payload.room_id))
