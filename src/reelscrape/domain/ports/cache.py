"""Cache port for request-scoped lookup results (title pages, streams)."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Async key-value cache with per-entry TTL.

    Implemented by ``DiskcacheAdapter`` and ``RedisAdapter``; constructed once
    in the lifespan and shared by all use cases:

        async with cache:
            await cache.set("multimovies:info:https://...", page, ttl=900)
    """

    async def get(self, key: str) -> Any:
        """Return the cached value, ``None`` when missing or expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Store *value*; ``ttl`` in seconds (adapter default when ``None``)."""
        ...

    async def delete(self, key: str) -> bool: ...

    async def exists(self, key: str) -> bool: ...

    async def clear(self) -> None: ...

    async def aclose(self) -> None: ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
