"""Operations endpoints providing health checks and metrics."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from huddle.api.deps import Services, get_services, get_settings
from huddle.obs import health
from huddle.settings import Settings

router = APIRouter(prefix="", tags=["ops"])


@router.get("/health/live")
async def health_live() -> dict[str, str]:
	return await health.liveness()


@router.get("/health/ready")
async def health_ready(
	services: Services = Depends(get_services),
	config: Settings = Depends(get_settings),
) -> Response:
	status_code, payload = await health.readiness(services.store, config)
	return JSONResponse(content=payload, status_code=status_code)


@router.get("/metrics")
async def prometheus_metrics() -> Response:
	payload = generate_latest()
	return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
