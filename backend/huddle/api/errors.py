"""Global error handlers ensuring request_id is included in JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from huddle.domain.common.exceptions import HuddleError
from huddle.infra.store import StorageError
from huddle.obs import logging as obs_logging

logger = logging.getLogger(__name__)

_STATUS_BY_REASON = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "room_not_found": status.HTTP_404_NOT_FOUND,
    "not_found_or_forbidden": status.HTTP_404_NOT_FOUND,
    "message_not_found": status.HTTP_404_NOT_FOUND,
    "self_request": status.HTTP_409_CONFLICT,
    "already_friends": status.HTTP_409_CONFLICT,
    "already_requested": status.HTTP_409_CONFLICT,
    "reciprocal_pending": status.HTTP_409_CONFLICT,
    "already_member": status.HTTP_409_CONFLICT,
    "username_taken": status.HTTP_409_CONFLICT,
    "no_pending_request": status.HTTP_409_CONFLICT,
    "no_active_request": status.HTTP_409_CONFLICT,
    "not_friends": status.HTTP_409_CONFLICT,
    "not_authorized": status.HTTP_403_FORBIDDEN,
    "room_is_private": status.HTTP_403_FORBIDDEN,
    "not_member": status.HTTP_403_FORBIDDEN,
    "not_room_member": status.HTTP_403_FORBIDDEN,
    "not_message_author": status.HTTP_403_FORBIDDEN,
    "room_is_public": status.HTTP_400_BAD_REQUEST,
    "not_dm_room": status.HTTP_400_BAD_REQUEST,
    "self_dm": status.HTTP_400_BAD_REQUEST,
    "username_required": status.HTTP_400_BAD_REQUEST,
    "password_required": status.HTTP_400_BAD_REQUEST,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
}


def get_request_id(request: Request, default: str = "unknown") -> str:
    rid = getattr(request.state, "request_id", None) or obs_logging.current_request_id()
    return rid or default


def status_for(exc: HuddleError | StorageError) -> int:
    if isinstance(exc, StorageError):
        if exc.reason == "storage_corrupted":
            return status.HTTP_503_SERVICE_UNAVAILABLE
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return _STATUS_BY_REASON.get(exc.reason, status.HTTP_400_BAD_REQUEST)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HuddleError)
    async def domain_exc_handler(request: Request, exc: HuddleError):  # type: ignore[override]
        payload = {**exc.to_dict(), "request_id": get_request_id(request)}
        return JSONResponse(status_code=status_for(exc), content=payload)

    @app.exception_handler(StorageError)
    async def storage_exc_handler(request: Request, exc: StorageError):  # type: ignore[override]
        logger.error("storage_failure", extra={"entity": exc.entity, "reason": exc.reason})
        payload = {
            "detail": exc.reason,
            "message": exc.message,
            "entity": exc.entity,
            "request_id": get_request_id(request),
        }
        return JSONResponse(status_code=status_for(exc), content=payload)

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        payload = {"detail": exc.detail, "request_id": get_request_id(request)}
        return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        payload = {
            "detail": "validation_error",
            "errors": jsonable_errors(exc),
            "request_id": get_request_id(request),
        }
        return JSONResponse(status_code=422, content=payload)


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw ``ctx``/``input`` values, which may not serialise."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]
