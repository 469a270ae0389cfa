"""FastAPI application factory for the command surface."""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response

from .api.errors import map_exception
from .api.routes import router
from .logging import bind_trace, configure_logging
from .providers import GatewayError
from .services.gateway import GatewayService
from .services.workspace import CommandError
from .settings import APP_VERSION, Settings, get_settings

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None, gateway: GatewayService | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    gateway = gateway or GatewayService(settings=settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await gateway.shutdown()

    app = FastAPI(title="devpilot", version=APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway

    @app.middleware("http")
    async def inject_request_context(  # pragma: no cover
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("x-request-id", uuid.uuid4().hex)
        request.state.request_id = request_id
        bind_trace(request_id=request_id)
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    async def render_error(request: Request, exc: Exception) -> Response:
        response = map_exception(exc)
        if response.status_code == 500:
            logger.error("command.crashed", path=request.url.path, error=str(exc), exc_info=exc)
        else:
            logger.warning("command.failed", path=request.url.path, error=str(exc))
        return response

    # ``Exception`` is served by Starlette's outermost middleware, so unexpected
    # failures still reach the client as ``{"error": text}``.
    for error_type in (GatewayError, CommandError, OSError, Exception):
        app.add_exception_handler(error_type, render_error)

    app.include_router(router)
    return app
