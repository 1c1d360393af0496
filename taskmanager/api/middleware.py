"""Application-wide HTTP middleware."""

import json
import logging
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskmanager.core.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def is_json_content_type(content_type: str) -> bool:
    """True for application/json and structured ``+json`` media types."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class JSONBodyMiddleware(BaseHTTPMiddleware):
    """
    Parses every JSON request body before routing.

    A body declared as JSON that fails to parse is answered with 400 for
    every method and path, so no route handler or dependency ever sees it.
    Empty bodies pass through untouched.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not is_json_content_type(request.headers.get("content-type", "")):
            return await call_next(request)

        body = await request.body()
        if body:
            try:
                json.loads(body)
            except ValueError as e:
                logger.warning(
                    "Rejected malformed JSON body",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "error": str(e),
                    },
                )
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=ErrorResponse(
                        error="Bad Request",
                        message="Malformed JSON in request body.",
                        detail=str(e),
                    ).model_dump(),
                )

        return await call_next(request)
