"""Info and stream endpoints (one pair per configured site profile)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from reelscrape.domain.exceptions import (
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from reelscrape.interfaces.api.presenter import present_stream, present_title_page
from reelscrape.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["scrape"])


def _is_dev(state: AppState) -> bool:
    return state.config.environment == "dev"


def _error(state: AppState, exc: Exception, *, context: dict[str, Any]) -> JSONResponse:
    """Map the error taxonomy to status codes and JSON bodies."""
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    if isinstance(exc, UpstreamError):
        log.warning("upstream_error", error=str(exc), **context)
        body: dict[str, Any] = {"error": "Failed to fetch upstream content"}
    else:
        log.exception("unhandled_error", **context)
        body = {"error": "Internal server error"}
    if _is_dev(state):
        body["details"] = str(exc)
    return JSONResponse(status_code=500, content=body)


@router.get("/{site}/info")
async def title_info(
    request: Request,
    site: str,
    link: str | None = Query(default=None),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    try:
        uc = state.info_use_cases.get(site)
        if uc is None:
            raise NotFoundError(f"Unknown site: {site}")
        page = await uc.execute(link)
    except Exception as exc:  # noqa: BLE001
        return _error(state, exc, context={"site": site, "link": link})
    return JSONResponse(content=present_title_page(page))


@router.get("/{site}/stream")
async def stream(
    request: Request,
    site: str,
    url: str | None = Query(default=None),
    type: str | None = Query(default=None),  # noqa: A002 accepted, unused
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    try:
        uc = state.stream_use_cases.get(site)
        if uc is None:
            raise NotFoundError(f"Unknown site: {site}")
        streams = await uc.execute(url)
    except Exception as exc:  # noqa: BLE001
        return _error(state, exc, context={"site": site, "url": url, "type": type})
    return JSONResponse(content=[present_stream(s) for s in streams])
