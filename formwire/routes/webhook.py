"""Webhook endpoint receiving Results after someone takes a form.

The body is decoded as a Results document (answers sorted by field id) and
handed to the application's results handler. A handler error yields a 500 so
the sender retries; the handler may therefore see the same results more than
once and should de-duplicate on `Results.token`.
"""

from __future__ import annotations

import inspect
import logging
from functools import partial
from typing import Awaitable, Callable, Union

import anyio
from fastapi import APIRouter, Request, Response

from formwire.http.problem import problem
from formwire.logic.decoder import decode_results
from formwire.models.results import Results
from formwire.models.wire import WireFormat

logger = logging.getLogger(__name__)

ResultsHandler = Callable[[Results, Request], Union[None, Awaitable[None]]]

_OTHER_METHODS = ["GET", "PUT", "PATCH", "DELETE"]


def _is_async(handler: ResultsHandler) -> bool:
    return inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(getattr(handler, "__call__", None))


async def receive_results(request: Request) -> Response:
    """POST webhook: decode Results and pass them to the handler.

    Malformed bodies raise MalformedInput, answered with 400 by the
    application's exception handler before the handler is ever called.
    """
    body = await request.body()
    results = decode_results(body, WireFormat.JSON)
    logger.info("webhook.received", extra={"token": results.token, "answers": len(results.answers)})

    handler: ResultsHandler = request.app.state.results_handler
    try:
        if _is_async(handler):
            outcome = handler(results, request)
        else:
            outcome = await anyio.to_thread.run_sync(partial(handler, results, request))
        if inspect.isawaitable(outcome):
            await outcome
    except Exception as exc:
        logger.error("webhook.handler_failed", exc_info=exc, extra={"token": results.token})
        return problem(500, "Results handler failed")
    return Response(status_code=200)


async def reject_method(request: Request) -> Response:
    logger.warning(
        "webhook.invalid_method",
        extra={"method": request.method, "ip": request.client.host if request.client else "", "url": str(request.url)},
    )
    return problem(405, "Method Not Allowed")


def build_router(path: str) -> APIRouter:
    router = APIRouter()
    router.add_api_route(
        path,
        receive_results,
        methods=["POST"],
        summary="Receive form results",
        response_class=Response,
        responses={400: {"content": {"application/problem+json": {}}}},
    )
    router.add_api_route(path, reject_method, methods=_OTHER_METHODS, include_in_schema=False)
    return router


__all__ = ["ResultsHandler", "receive_results", "reject_method", "build_router"]
