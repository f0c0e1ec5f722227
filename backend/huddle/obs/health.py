"""Health check helpers for liveness and readiness endpoints."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Dict, Tuple

from huddle.infra.store import JsonDocumentStore
from huddle.settings import Settings

LOGGER = logging.getLogger(__name__)


async def liveness() -> Dict[str, str]:
	return {"status": "ok"}


def _data_dir_status(store: JsonDocumentStore) -> Dict[str, Any]:
	path = store.data_dir
	if not path.exists():
		# Created lazily on first access.
		parent = path.parent if path.parent.exists() else None
		ok = parent is not None and os.access(parent, os.W_OK)
		return {"ok": ok, "path": str(path), "exists": False}
	ok = path.is_dir() and os.access(path, os.W_OK)
	return {"ok": ok, "path": str(path), "exists": True}


async def readiness(store: JsonDocumentStore, config: Settings) -> Tuple[int, Dict[str, Any]]:
	storage = await asyncio.to_thread(_data_dir_status, store)
	if not storage["ok"]:
		LOGGER.warning("Data directory is not writable", extra={"path": storage["path"]})
	payload: Dict[str, Any] = {
		"status": "ok" if storage["ok"] else "degraded",
		"service": config.service_name,
		"commit": config.git_commit,
		"storage": storage,
		"corruption_policy": store.corruption_policy,
	}
	return (200 if storage["ok"] else 503), payload
