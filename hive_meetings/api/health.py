"""Health endpoints for the meetings service.

Readiness covers what the webhook path needs end to end: the database, the
signed-URL storage, the transcriber (with a callback address it can reach)
and the summarizer.
"""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from hive_meetings.config import settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Service identity and status."""

    status: str
    timestamp: datetime
    version: str
    environment: str


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    """Overall readiness with one entry per dependency."""

    status: str
    checks: dict[str, str]


def _configured(*values: str | None) -> str:
    return "ok" if all(values) else "not_configured"


async def _database_check(request: Request) -> str:
    db = getattr(request.app.state, "db", None)
    if db is None:
        return "not_configured"
    try:
        return "ok" if await db.is_healthy() else "failed"
    except Exception:
        return "failed"


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Process is up."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Report whether recordings can be taken through the pipeline."""
    checks = {
        "database": await _database_check(request),
        "storage": _configured(settings.supabase_url, settings.supabase_service_role_key),
        "transcriber": _configured(settings.assemblyai_api_key, settings.callback_url),
        "summarizer": _configured(settings.anthropic_api_key),
    }
    status = "ready" if all(v == "ok" for v in checks.values()) else "not_ready"
    return ReadinessResponse(status=status, checks=checks)
