"""JSON document store: one document per entity type under a data directory.

Every document is a JSON array of records. Mutations go through
``JsonDocumentStore.transaction`` which holds the document's lock for the
whole load -> mutate -> persist sequence, so two concurrent operations on the
same document cannot overwrite each other's changes. Isolation is per store
instance; one process owns a data directory.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from enum import Enum
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List

import ulid

from huddle.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class EntityType(str, Enum):
	USERS = "users"
	ROOMS = "rooms"
	NOTIFICATIONS = "notifications"
	MESSAGES = "messages"


class StorageError(RuntimeError):
	"""Base class for persistence failures."""

	reason: str = "storage_error"

	def __init__(self, entity: str, message: str) -> None:
		super().__init__(message)
		self.entity = entity
		self.message = message


class StorageWriteFailed(StorageError):
	reason = "storage_write_failed"

	def __init__(self, entity: str, cause: str) -> None:
		super().__init__(entity, f"Failed to write {entity} data: {cause}")
		self.cause = cause


class StorageCorrupted(StorageError):
	reason = "storage_corrupted"

	def __init__(self, entity: str, cause: str) -> None:
		super().__init__(entity, f"The {entity} document is malformed: {cause}")
		self.cause = cause


def _entity_name(entity: EntityType | str) -> str:
	return entity.value if isinstance(entity, EntityType) else str(entity)


def _dump(records: List[Record]) -> str:
	return json.dumps(records, indent=2)


class JsonDocumentStore:
	def __init__(self, data_dir: str | Path, *, corruption_policy: str = "reset") -> None:
		if corruption_policy not in ("reset", "strict"):
			raise ValueError(f"unknown corruption policy: {corruption_policy}")
		self.data_dir = Path(data_dir)
		self.corruption_policy = corruption_policy
		self._locks: Dict[str, asyncio.Lock] = {}

	def path_for(self, entity: EntityType | str) -> Path:
		return self.data_dir / f"{_entity_name(entity)}.json"

	def _lock(self, name: str) -> asyncio.Lock:
		lock = self._locks.get(name)
		if lock is None:
			lock = asyncio.Lock()
			self._locks[name] = lock
		return lock

	async def load(self, entity: EntityType | str) -> List[Record]:
		name = _entity_name(entity)
		async with self._lock(name):
			return await asyncio.to_thread(self._read_document, name)

	async def save_all(self, entity: EntityType | str, records: List[Record]) -> None:
		name = _entity_name(entity)
		async with self._lock(name):
			await asyncio.to_thread(self._write_document, name, records)

	@asynccontextmanager
	async def transaction(self, entity: EntityType | str) -> AsyncIterator[List[Record]]:
		"""Yield the document's records under its lock.

		The records are persisted when the block exits cleanly and they differ from
		what was loaded; an exception inside the block discards the changes.
		"""
		name = _entity_name(entity)
		async with self._lock(name):
			records = await asyncio.to_thread(self._read_document, name)
			baseline = _dump(records)
			yield records
			try:
				unchanged = _dump(records) == baseline
			except (TypeError, ValueError):
				unchanged = False
			if not unchanged:
				await asyncio.to_thread(self._write_document, name, records)

	# Blocking helpers, run in a worker thread.

	def _read_document(self, name: str) -> List[Record]:
		path = self.path_for(name)
		if not path.exists():
			self._write_document(name, [])
			return []
		try:
			content = path.read_text(encoding="utf-8")
		except OSError as exc:
			raise StorageError(name, f"Failed to read {name} data: {exc}") from exc
		if not content.strip():
			logger.warning("Document is empty, initialising with default data", extra={"entity": name})
			obs_metrics.inc_store_reset(name, "empty")
			self._write_document(name, [])
			return []
		try:
			data = json.loads(content)
		except ValueError as exc:
			return self._recover(name, path, f"invalid JSON: {exc}")
		if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
			return self._recover(name, path, "expected a JSON array of objects")
		return data

	def _recover(self, name: str, path: Path, cause: str) -> List[Record]:
		logger.error("Document is malformed", extra={"entity": name, "cause": cause})
		if self.corruption_policy == "strict":
			raise StorageCorrupted(name, cause)
		backup = path.with_name(f"{path.name}.corrupt-{ulid.new()}")
		try:
			os.replace(path, backup)
		except OSError:
			logger.exception("Could not move malformed document aside", extra={"entity": name})
		else:
			logger.warning(
				"Malformed document moved aside, initialising with default data",
				extra={"entity": name, "backup": backup.name},
			)
		obs_metrics.inc_store_reset(name, "corrupted")
		self._write_document(name, [])
		return []

	def _write_document(self, name: str, records: List[Record]) -> None:
		path = self.path_for(name)
		tmp_path: str | None = None
		try:
			self.data_dir.mkdir(parents=True, exist_ok=True)
			payload = _dump(records)
			fd, tmp_path = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.data_dir)
			with os.fdopen(fd, "w", encoding="utf-8") as handle:
				handle.write(payload)
				handle.flush()
				os.fsync(handle.fileno())
			os.replace(tmp_path, path)
			tmp_path = None
		except (OSError, TypeError, ValueError) as exc:
			obs_metrics.inc_store_write_failure(name)
			logger.error("Failed to write document", extra={"entity": name, "cause": str(exc)})
			raise StorageWriteFailed(name, str(exc)) from exc
		finally:
			if tmp_path is not None and os.path.exists(tmp_path):
				os.unlink(tmp_path)


__all__ = [
	"EntityType",
	"JsonDocumentStore",
	"Record",
	"StorageCorrupted",
	"StorageError",
	"StorageWriteFailed",
]
