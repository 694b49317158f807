"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and the handler callables that turn codec and
routing errors into application/problem+json responses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from formwire.errors import MalformedInput

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem(status: int, title: str, detail: str = "") -> JSONResponse:
    payload: Dict[str, Any] = {"title": title, "status": status}
    if detail:
        payload["detail"] = detail
    return JSONResponse(payload, status_code=status, media_type=PROBLEM_MEDIA_TYPE)


def _client_context(request: Request) -> Dict[str, str]:
    client = request.client
    return {"ip": client.host if client else "", "url": str(request.url)}


async def handle_malformed_input(request: Request, exc: MalformedInput) -> JSONResponse:  # noqa: D401
    logger.warning("webhook.decode_failed", extra={**_client_context(request), "error": str(exc)})
    return problem(400, "Malformed document", str(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: D401
    status = int(exc.status_code or 500)
    return problem(status, str(exc.detail or "Error"))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error", exc_info=exc, extra=_client_context(request))
    return problem(500, "Internal Server Error")


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem",
    "handle_malformed_input",
    "handle_http_exception",
    "handle_unexpected_error",
]
