"""Observability package bootstrap."""

from __future__ import annotations

from fastapi import FastAPI

from huddle.obs import logging as obs_logging
from huddle.obs import middleware
from huddle.settings import Settings


def init(app: FastAPI, config: Settings) -> None:
	if not config.obs_enabled:
		middleware.install(app, enabled=False)
		return
	obs_logging.configure_logging(config)
	middleware.install(app)


__all__ = ["init"]
