"""Title info use case (GetInfo).

link -> canonical URL -> cache -> fetch page -> TitlePage.
"""

from __future__ import annotations

import structlog

from reelscrape.application.use_cases.ports import PageFetcher
from reelscrape.domain.entities.media import TitlePage
from reelscrape.domain.exceptions import ValidationError
from reelscrape.domain.ports.cache import CachePort
from reelscrape.infrastructure.common.urls import normalize_link
from reelscrape.infrastructure.config.schema import SiteProfile
from reelscrape.infrastructure.scraping.page_info import extract_title_page

log = structlog.get_logger(__name__)


class TitleInfoUseCase:
    """Title, synopsis, image and season/episode links of a title page."""

    def __init__(
        self,
        *,
        site_name: str,
        site: SiteProfile,
        fetcher: PageFetcher,
        cache: CachePort,
        ttl_seconds: int,
    ) -> None:
        self._site_name = site_name
        self._site = site
        self._fetcher = fetcher
        self._cache = cache
        self._ttl = ttl_seconds

    def cache_key(self, url: str) -> str:
        return f"{self._site_name}:info:{url}"

    async def execute(self, link: str | None) -> TitlePage:
        if not link or not link.strip():
            raise ValidationError("Missing link parameter")

        url = normalize_link(self._site.base_url, link.strip())
        key = self.cache_key(url)

        if self._ttl > 0:
            cached = await self._cache.get(key)
            if cached is not None:
                log.info("info_cache_hit", site=self._site_name, url=url)
                return cached

        log.info("info_fetch", site=self._site_name, url=url)
        html = await self._fetcher.get_text(url)
        page = extract_title_page(html, url, self._site)

        log.info(
            "info_extracted",
            site=self._site_name,
            url=url,
            kind=page.kind.value,
            links=len(page.links),
        )
        if self._ttl > 0:
            await self._cache.set(key, page, ttl=self._ttl)
        return page
