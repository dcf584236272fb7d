"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from reelscrape.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from reelscrape.application.use_cases import (
        StreamResolutionUseCase,
        TitleInfoUseCase,
    )
    from reelscrape.domain.ports import CachePort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient

    # Use cases keyed by site profile name
    info_use_cases: dict[str, TitleInfoUseCase]
    stream_use_cases: dict[str, StreamResolutionUseCase]
