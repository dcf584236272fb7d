"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import structlog
from fastapi import FastAPI

from reelscrape.application.use_cases import StreamResolutionUseCase, TitleInfoUseCase
from reelscrape.domain.ports.cache import CachePort
from reelscrape.infrastructure.cache.cache_factory import create_cache
from reelscrape.infrastructure.common.http import create_http_client
from reelscrape.infrastructure.common.upstream import UpstreamClient
from reelscrape.infrastructure.config.schema import AppConfig
from reelscrape.infrastructure.resolvers.embed_resolver import EmbedResolver
from reelscrape.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def wire_use_cases(state: AppState, config: AppConfig, cache: CachePort) -> None:
    """Build one TitleInfo/StreamResolution pair per configured site."""
    state.info_use_cases = {}
    state.stream_use_cases = {}
    for name, site in config.sites.items():
        fetcher = UpstreamClient(state.http_client, site)
        state.info_use_cases[name] = TitleInfoUseCase(
            site_name=name,
            site=site,
            fetcher=fetcher,
            cache=cache,
            ttl_seconds=config.cache_ttl_seconds,
        )
        state.stream_use_cases[name] = StreamResolutionUseCase(
            site_name=name,
            site=site,
            fetcher=fetcher,
            embed_resolver=EmbedResolver(state.http_client, site),
            cache=cache,
            ttl_seconds=config.cache_ttl_seconds,
        )
        log.info("site_wired", site=name, base_url=site.base_url)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (shared by all use cases)
        2. HTTP Client (shared by all site profiles)
        3. Per-site use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Cache
    cache = create_cache(
        backend=config.cache_backend,
        directory=str(config.cache_dir),
        redis_url=config.cache_redis_url,
        ttl_seconds=config.cache_ttl_seconds,
        max_concurrent=config.cache_max_concurrent,
    )
    await cache.__aenter__()
    state.cache = cache
    log.info("cache_initialized", backend=config.cache_backend)

    # 2) HTTP client (timeout + retry policy)
    state.http_client = create_http_client(config)

    # 3) Use cases
    wire_use_cases(state, config, cache)

    try:
        yield
    finally:
        await state.http_client.aclose()
        await cache.aclose()
        log.info("app_shutdown")
