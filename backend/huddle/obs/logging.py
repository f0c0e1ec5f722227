"""Structured JSON logging with per-request context."""

from __future__ import annotations

import json
import logging
import random
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from huddle.settings import Settings, settings as default_settings

_LOGGER_NAME = "huddle"

# request_id / route / user_id for the request being served
_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar("huddle_log_context", default={})

_REDACT = ("password", "hash", "token", "secret", "cookie", "authorization")
_MAX_TEXT = 256
_MAX_ITEMS = 10

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def bind_context(**fields: Optional[str]) -> Token:
	"""Layer non-empty ``fields`` over the current context; undo with ``reset_context``."""
	merged = dict(_CONTEXT.get())
	merged.update({key: value for key, value in fields.items() if value})
	return _CONTEXT.set(merged)


def reset_context(token: Token) -> None:
	_CONTEXT.reset(token)


def current_request_id() -> Optional[str]:
	return _CONTEXT.get().get("request_id")


def _scrub(key: str, value: Any) -> Any:
	if any(word in key.lower() for word in _REDACT):
		return "[redacted]"
	if isinstance(value, str) and len(value) > _MAX_TEXT:
		return value[:_MAX_TEXT] + "…"
	if isinstance(value, Mapping):
		items = list(value.items())
		scrubbed = {str(k): _scrub(str(k), v) for k, v in items[:_MAX_ITEMS]}
		if len(items) > _MAX_ITEMS:
			scrubbed["…"] = f"+{len(items) - _MAX_ITEMS} keys"
		return scrubbed
	if isinstance(value, (list, tuple, set, frozenset)):
		items = [_scrub(key, item) for item in value]
		return items[:_MAX_ITEMS] + (["…"] if len(items) > _MAX_ITEMS else [])
	return value


class JSONLogFormatter(logging.Formatter):
	"""One JSON object per line: base fields, bound request context, then ``extra``."""

	def __init__(self, config: Settings | None = None) -> None:
		super().__init__()
		config = config or default_settings
		self._static = {
			"service": config.service_name,
			"env": config.environment,
			"commit": config.git_commit,
		}

	def format(self, record: logging.LogRecord) -> str:  # noqa: A003
		payload: Dict[str, Any] = {
			"ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname.lower(),
			"msg": record.getMessage(),
			"logger": record.name,
			**self._static,
			**_CONTEXT.get(),
		}
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		for key, value in vars(record).items():
			if key not in _RECORD_ATTRS and not key.startswith("_"):
				payload[key] = _scrub(key, value)
		return json.dumps(payload, separators=(",", ":"), default=str)


class InfoSamplingFilter(logging.Filter):
	"""Keep a ``rate`` share of INFO records; other levels always pass."""

	def __init__(self, rate: float) -> None:
		super().__init__()
		self._rate = min(1.0, max(0.0, rate))

	def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
		if record.levelno != logging.INFO or self._rate >= 1.0:
			return True
		return random.random() < self._rate


def configure_logging(config: Settings | None = None) -> logging.Logger:
	"""Route the root logger through a single JSON stream handler."""
	config = config or default_settings
	handler = logging.StreamHandler()
	handler.setFormatter(JSONLogFormatter(config))
	handler.addFilter(InfoSamplingFilter(config.obs_log_sampling_rate_info))
	root = logging.getLogger()
	root.handlers[:] = [handler]
	root.setLevel(config.obs_log_level)
	# Requests are already logged by the observability middleware.
	logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
	return logging.getLogger(_LOGGER_NAME)


def get_logger(name: Optional[str] = None) -> logging.Logger:
	return logging.getLogger(name or _LOGGER_NAME)
