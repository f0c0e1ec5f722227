"""Request instrumentation: request ids, log context, latency metrics."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from huddle.obs import logging as obs_logging
from huddle.obs import metrics

REQUEST_ID_HEADER = "X-Request-Id"
USER_ID_HEADER = "X-User-Id"


def _route_label(request: Request) -> str:
	# Templated path keeps metric cardinality bounded.
	route = request.scope.get("route")
	return getattr(route, "path", None) or request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
	"""Assign every request an id and, when enabled, log and time it.

	The id is taken from ``X-Request-Id`` when the caller sends one and is
	echoed on the response either way; error handlers read it from
	``request.state.request_id``.
	"""

	def __init__(self, app, *, enabled: bool = True) -> None:
		super().__init__(app)
		self._enabled = enabled
		self._logger = obs_logging.get_logger("huddle.http")

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
		request.state.request_id = request_id
		token = obs_logging.bind_context(
			request_id=request_id,
			route=request.url.path,
			user_id=request.headers.get(USER_ID_HEADER),
		)
		started = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception:
			self._record(request, 500, started)
			self._logger.exception("http_request_error", extra={"method": request.method})
			raise
		else:
			self._record(request, response.status_code, started)
		finally:
			obs_logging.reset_context(token)

		response.headers.setdefault(REQUEST_ID_HEADER, request_id)
		return response

	def _record(self, request: Request, status_code: int, started: float) -> None:
		if not self._enabled:
			return
		elapsed = time.perf_counter() - started
		metrics.observe_request(_route_label(request), request.method, status_code, elapsed)
		self._logger.info(
			"http_request",
			extra={"status": status_code, "method": request.method, "latency_ms": round(elapsed * 1000, 3)},
		)


def install(app: FastAPI, *, enabled: bool = True) -> None:
	app.add_middleware(ObservabilityMiddleware, enabled=enabled)
