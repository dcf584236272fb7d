"""Cache factory - builds the adapter selected in config."""

from __future__ import annotations

import structlog

from reelscrape.domain.ports.cache import CachePort
from reelscrape.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from reelscrape.infrastructure.cache.redis_adapter import RedisAdapter
from reelscrape.infrastructure.config.schema import CacheBackend

log = structlog.get_logger(__name__)


def create_cache(
    backend: CacheBackend = "diskcache",
    *,
    directory: str = "./.cache/reelscrape",
    redis_url: str = "redis://localhost:6379/0",
    ttl_seconds: int = 900,
    max_concurrent: int = 10,
) -> CachePort:
    """Create the cache adapter for *backend*.

    Raises:
        ValueError: If `backend` is unknown.
    """
    if backend == "diskcache":
        log.info(
            "cache_factory_create",
            backend=backend,
            directory=directory,
            ttl=ttl_seconds,
        )
        return DiskcacheAdapter(
            directory=directory,
            ttl_seconds=ttl_seconds,
            max_concurrent=max_concurrent,
        )
    if backend == "redis":
        log.info("cache_factory_create", backend=backend, url=redis_url, ttl=ttl_seconds)
        return RedisAdapter(
            url=redis_url,
            ttl_seconds=ttl_seconds,
            max_concurrent=max_concurrent,
        )
    raise ValueError(
        f"Unknown cache backend: {backend!r}. Must be 'diskcache' or 'redis'."
    )
