"""Tests for TitleInfoUseCase."""

from __future__ import annotations

import httpx
import pytest
import respx

from reelscrape.application.use_cases.title_info import TitleInfoUseCase
from reelscrape.domain.entities.media import MediaKind
from reelscrape.domain.exceptions import UpstreamError, ValidationError
from reelscrape.infrastructure.common.upstream import UpstreamClient
from reelscrape.infrastructure.config.schema import SiteProfile
from tests.conftest import FakeCache, FakeClock

MOVIE_URL = "https://multimovies.press/movies/quiet-harbor/"
MOVIE_HTML = (
    "<html><body>"
    '<div class="g-item"><a href="https://img.example/qh.jpg"></a></div>'
    '<div class="wp-content"><p>Boats and secrets.</p></div>'
    "</body></html>"
)


def _make_use_case(
    http_client: httpx.AsyncClient,
    site: SiteProfile,
    cache: FakeCache,
    *,
    ttl: int = 900,
) -> TitleInfoUseCase:
    return TitleInfoUseCase(
        site_name="multimovies",
        site=site,
        fetcher=UpstreamClient(http_client, site),
        cache=cache,
        ttl_seconds=ttl,
    )


class TestTitleInfo:
    async def test_movie_page(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        respx_mock: respx.MockRouter,
    ) -> None:
        respx_mock.get(MOVIE_URL).mock(return_value=httpx.Response(200, text=MOVIE_HTML))
        uc = _make_use_case(http_client, site, cache)

        page = await uc.execute(MOVIE_URL)

        assert page.kind is MediaKind.MOVIE
        assert page.title == "quiet harbor"
        assert page.synopsis == "Boats and secrets."
        assert page.image == "https://img.example/qh.jpg"
        assert page.links[0].link == MOVIE_URL

    @pytest.mark.parametrize("link", ["/movies/quiet-harbor/", "movies/quiet-harbor/"])
    async def test_relative_link_normalized(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        respx_mock: respx.MockRouter,
        link: str,
    ) -> None:
        route = respx_mock.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, text=MOVIE_HTML)
        )
        uc = _make_use_case(http_client, site, cache)

        page = await uc.execute(link)

        assert route.called
        assert page.links[0].link == MOVIE_URL

    @pytest.mark.parametrize("link", [None, "", "   "])
    async def test_missing_link(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        link: str | None,
    ) -> None:
        uc = _make_use_case(http_client, site, cache)
        with pytest.raises(ValidationError, match="Missing link parameter"):
            await uc.execute(link)

    async def test_cached_within_ttl(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        clock: FakeClock,
        respx_mock: respx.MockRouter,
    ) -> None:
        route = respx_mock.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, text=MOVIE_HTML)
        )
        uc = _make_use_case(http_client, site, cache)

        first = await uc.execute(MOVIE_URL)
        clock.advance(899)
        second = await uc.execute(MOVIE_URL)

        assert second == first
        assert route.call_count == 1
        assert cache.set_calls == [(f"multimovies:info:{MOVIE_URL}", 900)]

        clock.advance(2)
        await uc.execute(MOVIE_URL)
        assert route.call_count == 2

    async def test_ttl_zero_disables_cache(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        respx_mock: respx.MockRouter,
    ) -> None:
        route = respx_mock.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, text=MOVIE_HTML)
        )
        uc = _make_use_case(http_client, site, cache, ttl=0)

        await uc.execute(MOVIE_URL)
        await uc.execute(MOVIE_URL)

        assert route.call_count == 2
        assert cache.set_calls == []

    async def test_upstream_failure_not_cached(
        self,
        http_client: httpx.AsyncClient,
        site: SiteProfile,
        cache: FakeCache,
        respx_mock: respx.MockRouter,
    ) -> None:
        respx_mock.get(MOVIE_URL).mock(return_value=httpx.Response(502))
        uc = _make_use_case(http_client, site, cache)

        with pytest.raises(UpstreamError):
            await uc.execute(MOVIE_URL)
        assert cache.set_calls == []
