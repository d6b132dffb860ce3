"""
Health check endpoints.
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ... import __version__
from ..deps import CacheDep, SettingsDep
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])
api_router = APIRouter(tags=["health"])
logger = logging.getLogger("ackomer")

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    uptime: float
    environment: str


def uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


@router.get("", response_model=ApiResponse[HealthResponse])
@router.get("/", response_model=ApiResponse[HealthResponse], include_in_schema=False)
async def health_check(request: Request, settings: SettingsDep):
    """Process health: always OK while the server is answering."""
    return ok(
        request,
        data=HealthResponse(
            status="OK",
            timestamp=datetime.utcnow(),
            uptime=uptime_seconds(),
            environment=settings.app_env,
        ),
        message="OK",
    )


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request, cache: CacheDep, settings: SettingsDep):
    """
    Readiness check endpoint.

    Pings MongoDB and reports Redis and the external API configuration.
    Redis is optional, so only the database decides readiness.
    """
    checks = {}
    all_ok = True

    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        checks["database"] = "not_initialized"
        all_ok = False
    else:
        try:
            await client.admin.command("ping")
            checks["database"] = "ok"
        except Exception as e:
            logger.error(f"Readiness database ping failed: {e}")
            checks["database"] = f"error: {str(e)[:50]}"
            all_ok = False

    health_check = getattr(cache, "health_check", None)
    if health_check is not None and await health_check():
        checks["redis"] = "ok"
    else:
        checks["redis"] = "unavailable"

    checks["azure_openai"] = "configured" if settings.azure_openai.is_configured else "not_configured"
    checks["azure_speech"] = "configured" if settings.azure_speech.is_configured else "not_configured"

    status = "ready" if all_ok else "degraded"
    return ok(
        request,
        data={"status": status, "timestamp": datetime.utcnow(), "checks": checks},
        message="OK" if all_ok else "Some services unavailable",
    )


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    return ok(request, data={"status": "alive", "timestamp": datetime.utcnow()}, message="OK")


@api_router.get("/health", response_model=ApiResponse[dict])
async def api_health(request: Request):
    return ok(request, data={"status": "API is running", "version": __version__}, message="OK")
