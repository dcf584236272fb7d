"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from reelscrape.infrastructure.config import AppConfig
from reelscrape.interfaces.app_state import AppState
from reelscrape.interfaces.composition import lifespan

log = structlog.get_logger(__name__)

_VERSION = "0.1.0"


def _usage_banner(config: AppConfig) -> str:
    lines = [f"{config.app_name} {_VERSION}", "", "Endpoints:"]
    for name in config.sites:
        lines.append(f"  GET /api/{name}/info?link=<path-or-url>")
        lines.append(f"  GET /api/{name}/stream?url=<page-url>")
    lines.append("  GET /health")
    return "\n".join(lines) + "\n"


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, cache, use cases) are created in lifespan().
    """
    app = FastAPI(
        title="reelscrape",
        description="JSON proxy for DooPlay movie/TV streaming sites",
        version=_VERSION,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from reelscrape.interfaces.api.router import router as api_router

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        """Usage banner."""
        return _usage_banner(config)

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        """Liveness probe, 200 as long as the process is running."""
        return "OK"

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
