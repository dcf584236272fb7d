"""Protocols the use cases need from infrastructure.

Infrastructure components satisfy these via structural subtyping.
"""

from __future__ import annotations

from typing import Any, Protocol

from reelscrape.domain.entities.media import EmbedResolution


class PageFetcher(Protocol):
    """Fetches upstream pages with the site's header set."""

    async def get_text(self, url: str, *, referer: str | None = None) -> str: ...

    async def post_form(
        self, url: str, data: dict[str, str], *, referer: str | None = None
    ) -> Any: ...


class EmbedResolverPort(Protocol):
    """Follows helper hops from a player iframe to the final iframe URL."""

    async def resolve(self, iframe_url: str) -> EmbedResolution: ...
