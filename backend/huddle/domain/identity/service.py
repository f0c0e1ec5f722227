"""Account registration, login and lookup over the users document."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

import ulid

from huddle.domain.identity.exceptions import (
	InvalidCredentials,
	PasswordRequired,
	UserNotFound,
	UsernameRequired,
	UsernameTaken,
)
from huddle.domain.identity.models import User, UserSnapshot
from huddle.infra.password import hash_password, needs_rehash, verify_password
from huddle.infra.store import EntityType, JsonDocumentStore

logger = logging.getLogger(__name__)


def _clean_username(username: str | None) -> str:
	cleaned = (username or "").strip()
	if not cleaned:
		raise UsernameRequired()
	return cleaned


class IdentityService:
	def __init__(self, store: JsonDocumentStore, *, admin_usernames: Iterable[str] = ()) -> None:
		self._store = store
		self._admins = frozenset(name.strip().lower() for name in admin_usernames if name.strip())

	async def register(self, username: str, password: Optional[str]) -> User:
		if not password:
			raise PasswordRequired()
		cleaned = _clean_username(username)
		password_hash = await asyncio.to_thread(hash_password, password)
		user = await self._create(cleaned, password_hash=password_hash, is_guest=False)
		logger.info("user_registered", extra={"user": user.id})
		return user

	async def create_guest(self, username: str) -> User:
		cleaned = _clean_username(username)
		user = await self._create(cleaned, password_hash=None, is_guest=True)
		logger.info("guest_created", extra={"user": user.id})
		return user

	async def _create(self, username: str, *, password_hash: Optional[str], is_guest: bool) -> User:
		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			if snapshot.find_by_username(username) is not None:
				raise UsernameTaken()
			user = User(
				id=str(ulid.new()),
				username=username,
				password_hash=password_hash,
				is_guest=is_guest,
				is_admin=username.lower() in self._admins,
			)
			snapshot.add(user)
		return user

	async def login(self, username: str, password: Optional[str]) -> User:
		records = await self._store.load(EntityType.USERS)
		candidate = UserSnapshot(records).find_by_username(username or "")
		if candidate is None:
			raise InvalidCredentials()
		rehash: Optional[str] = None
		if candidate.password_hash:
			if not password or not await asyncio.to_thread(verify_password, candidate.password_hash, password):
				raise InvalidCredentials()
			if needs_rehash(candidate.password_hash):
				rehash = await asyncio.to_thread(hash_password, password)
		elif password or not candidate.is_guest:
			raise InvalidCredentials()

		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			user = snapshot.get(candidate.id)
			if user is None:
				raise InvalidCredentials()
			user.is_typing_in_room_id = None
			if rehash:
				user.password_hash = rehash
			snapshot.put(user)
		logger.info("user_logged_in", extra={"user": user.id})
		return user

	async def get_user(self, user_id: str) -> User:
		records = await self._store.load(EntityType.USERS)
		user = UserSnapshot(records).get(user_id)
		if user is None:
			raise UserNotFound()
		return user

	async def search(self, query: str, current_user_id: str) -> List[User]:
		needle = (query or "").lower()
		records = await self._store.load(EntityType.USERS)
		return [
			user
			for user in UserSnapshot(records).all()
			if user.id != current_user_id and needle in user.username.lower()
		]

	async def set_typing(self, user_id: str, room_id: Optional[str]) -> User:
		async with self._store.transaction(EntityType.USERS) as records:
			snapshot = UserSnapshot(records)
			user = snapshot.get(user_id)
			if user is None:
				raise UserNotFound()
			user.is_typing_in_room_id = room_id
			snapshot.put(user)
		return user
