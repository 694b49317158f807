from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from formwire.config import AppConfig, load_config
from formwire.errors import MalformedInput
from formwire.http.problem import (
    handle_http_exception,
    handle_malformed_input,
    handle_unexpected_error,
)
from formwire.logging_setup import configure_logging
from formwire.routes.webhook import ResultsHandler, build_router

logger = logging.getLogger(__name__)


def create_app(handler: ResultsHandler, config: Optional[AppConfig] = None) -> FastAPI:
    """Build the webhook application.

    `handler` is called with each decoded Results and the originating
    request. Configuration is loaded from the environment when not given.
    """
    config = config or load_config()
    configure_logging(config.logging.level)

    app = FastAPI(title="formwire webhook")
    app.state.config = config
    app.state.results_handler = handler
    app.include_router(build_router(config.webhook.path), tags=["Webhook"])

    app.add_exception_handler(MalformedInput, handle_malformed_input)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
    logger.info("app.created", extra={"webhook_path": config.webhook.path})
    return app


def serve(handler: ResultsHandler, host: str = "0.0.0.0", port: int = 8000, config: Optional[AppConfig] = None) -> None:
    """Run the webhook listener until interrupted."""
    import uvicorn

    uvicorn.run(create_app(handler, config), host=host, port=port, log_config=None)


__all__ = ["create_app", "serve"]
