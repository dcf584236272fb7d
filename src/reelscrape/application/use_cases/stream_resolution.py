"""Stream resolution use case (GetStream).

page URL -> player descriptor -> admin-ajax iframe -> embed helper hops
-> packed player script -> HLS manifest + tracks.
"""

from __future__ import annotations

from urllib.parse import urljoin

import structlog

from reelscrape.application.use_cases.ports import EmbedResolverPort, PageFetcher
from reelscrape.domain.entities.media import StreamResult
from reelscrape.domain.exceptions import NotFoundError, ValidationError
from reelscrape.domain.ports.cache import CachePort
from reelscrape.infrastructure.common.urls import normalize_link, origin_of
from reelscrape.infrastructure.config.schema import SiteProfile
from reelscrape.infrastructure.scraping.link_extractor import extract_links
from reelscrape.infrastructure.scraping.packer import unpack_packed_script
from reelscrape.infrastructure.scraping.player import (
    extract_iframe_url,
    extract_player_descriptor,
)

log = structlog.get_logger(__name__)


class StreamResolutionUseCase:
    """Resolves a title/episode page to a playable HLS stream."""

    def __init__(
        self,
        *,
        site_name: str,
        site: SiteProfile,
        fetcher: PageFetcher,
        embed_resolver: EmbedResolverPort,
        cache: CachePort,
        ttl_seconds: int,
    ) -> None:
        self._site_name = site_name
        self._site = site
        self._fetcher = fetcher
        self._embed_resolver = embed_resolver
        self._cache = cache
        self._ttl = ttl_seconds

    def cache_key(self, url: str) -> str:
        return f"{self._site_name}:stream:{url}"

    async def _initial_iframe_url(self, page_url: str) -> str:
        """Player descriptor -> ``doo_player_ajax`` -> iframe URL."""
        html = await self._fetcher.get_text(page_url)

        descriptor = extract_player_descriptor(html, self._site.selectors.player_option)
        if descriptor is None:
            raise NotFoundError("Player data not found")

        ajax_url = f"{origin_of(page_url)}{self._site.ajax_path}"
        log.info("stream_player_ajax", url=ajax_url, post=descriptor.post_id)
        reply = await self._fetcher.post_form(
            ajax_url,
            {
                "action": self._site.ajax_action,
                "post": descriptor.post_id,
                "nume": descriptor.nume,
                "type": descriptor.type_value,
            },
            referer=page_url,
        )

        iframe_url = extract_iframe_url(reply)
        if not iframe_url:
            raise NotFoundError("No iframe URL found")
        # protocol-relative or path-only embeds resolve against the page
        return urljoin(page_url, iframe_url)

    async def _resolve(self, page_url: str) -> StreamResult:
        iframe_url = await self._initial_iframe_url(page_url)
        log.info("stream_iframe", page_url=page_url, iframe_url=iframe_url)

        resolution = await self._embed_resolver.resolve(iframe_url)
        final_url = resolution.iframe_url

        iframe_html = await self._fetcher.get_text(final_url, referer=page_url)
        script = unpack_packed_script(iframe_html)
        if script is None:
            log.info("stream_no_packed_script", iframe_url=final_url)

        links = extract_links(script, self._site.subtitle_language_pattern)
        if not links.manifest_url:
            raise NotFoundError("No stream URL found")

        return StreamResult(
            server=self._site.server_name,
            link=links.manifest_url,
            type="m3u8",
            subtitles=links.subtitles,
            thumbnails=links.thumbnails,
            headers={
                "Referer": final_url,
                "Origin": origin_of(final_url),
                "User-Agent": self._site.user_agent,
            },
        )

    async def execute(self, url: str | None) -> list[StreamResult]:
        if not url or not url.strip():
            raise ValidationError("Missing url parameter")

        page_url = normalize_link(self._site.base_url, url.strip())
        key = self.cache_key(page_url)

        if self._ttl > 0:
            cached = await self._cache.get(key)
            if cached is not None:
                log.info("stream_cache_hit", site=self._site_name, url=page_url)
                return cached

        log.info("stream_request", site=self._site_name, url=page_url)
        result = await self._resolve(page_url)
        log.info(
            "stream_resolved",
            site=self._site_name,
            url=page_url,
            subtitles=len(result.subtitles),
            thumbnails=len(result.thumbnails),
        )

        streams = [result]
        if self._ttl > 0:
            await self._cache.set(key, streams, ttl=self._ttl)
        return streams
