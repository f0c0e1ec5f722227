"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huddle import __version__
from huddle.api import identity, messages, notifications, ops, rooms, social
from huddle.api.deps import build_services
from huddle.api.errors import install_error_handlers
from huddle.obs import init as obs_init
from huddle.settings import Settings, settings

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
	"""Build the application; served with ``uvicorn --factory huddle.main:create_app``."""
	config = config or settings
	docs_url = None if config.is_prod() else "/docs"
	app = FastAPI(title="Huddle API", version=__version__, docs_url=docs_url, redoc_url=None)
	app.state.settings = config
	app.state.services = build_services(config)

	obs_init(app, config)
	if config.cors_allow_origins:
		app.add_middleware(
			CORSMiddleware,
			allow_origins=list(config.cors_allow_origins),
			allow_credentials=True,
			allow_methods=["*"],
			allow_headers=["*"],
		)
	install_error_handlers(app)

	app.include_router(ops.router)
	app.include_router(identity.router)
	app.include_router(social.router)
	app.include_router(notifications.router)
	app.include_router(rooms.router)
	app.include_router(messages.router)

	logger.info(
		"app_created",
		extra={"data_dir": str(config.data_dir), "corruption_policy": config.storage_corruption_policy},
	)
	return app
