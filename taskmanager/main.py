"""FastAPI application entrypoint."""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from taskmanager.api import health_router, tasks_router
from taskmanager.api.middleware import JSONBodyMiddleware
from taskmanager.config.logging import setup_logging
from taskmanager.config.settings import Settings, get_settings
from taskmanager.core.database import (
    create_pool,
    create_session_factory,
    dispose_pool,
    prepare_database,
)
from taskmanager.core.schemas import ErrorResponse

API_PREFIX = "/api"
TASKS_PREFIX = f"{API_PREFIX}/tasks"

# Seconds to wait for the startup database check when shutting down
SHUTDOWN_GRACE = 5.0

setup_logging(get_settings())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger.info(
        "Application startup",
        extra={"environment": app.state.settings.server.env},
    )

    # Not awaited: serving starts whatever the outcome.
    check = asyncio.create_task(asyncio.to_thread(prepare_database, app.state.engine))
    app.state.database_check = check

    yield

    logger.info("Application shutdown")
    await asyncio.wait({check}, timeout=SHUTDOWN_GRACE)
    if not check.done():
        # The worker thread cannot be interrupted and may still be using the pool.
        logger.warning(
            "Database check still running at shutdown; leaving pool open",
            extra={"grace_seconds": SHUTDOWN_GRACE},
        )
        return
    dispose_pool(app.state.engine)


async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for correlation."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


def cors_headers(request: Request) -> Dict[str, str]:
    """CORS headers for responses produced outside CORSMiddleware."""
    origin = request.headers.get("origin")
    if origin is None:
        return {}
    allowed = request.app.state.settings.server.cors_origins
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Runs in Starlette's outermost error middleware, past CORSMiddleware and
    the request ID middleware, so both sets of headers are added here.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "Unhandled exception",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=True,
    )

    headers = cors_headers(request)
    headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred.",
            detail=str(exc),
        ).model_dump(),
        headers=headers,
    )


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        settings: Resolved configuration; defaults to the process-wide settings
        engine: Connection pool to serve from; defaults to a new pool built
                from ``settings.database``

    Returns:
        FastAPI application, not yet listening
    """
    if settings is None:
        settings = get_settings()
    if engine is None:
        engine = create_pool(settings.database)

    app = FastAPI(
        title="Task Manager API",
        description="CRUD backend for tasks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Last added runs first: request ID, then CORS, then JSON body parsing.
    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(add_request_id)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(tasks_router, prefix=TASKS_PREFIX)
    app.include_router(health_router, prefix=API_PREFIX)

    return app


app = create_app()
