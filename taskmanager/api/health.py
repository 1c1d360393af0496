"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from taskmanager.core.schemas import HealthResponse

router = APIRouter(tags=["health"])


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Liveness probe.
    Always answers 200 and never touches the database, so it says
    nothing about database health.
    """
    return HealthResponse(
        status="ok",
        timestamp=utc_timestamp(),
        environment=request.app.state.settings.server.env,
    )
