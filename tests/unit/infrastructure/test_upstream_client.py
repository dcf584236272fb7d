"""Tests for UpstreamClient header handling and error translation."""

from __future__ import annotations

import httpx
import pytest
import respx

from reelscrape.domain.exceptions import UpstreamError
from reelscrape.infrastructure.common.upstream import UpstreamClient
from reelscrape.infrastructure.config.schema import SiteProfile

PAGE = "https://multimovies.press/movies/x/"
AJAX = "https://multimovies.press/wp-admin/admin-ajax.php"


@pytest.fixture()
def client(http_client: httpx.AsyncClient, site: SiteProfile) -> UpstreamClient:
    return UpstreamClient(http_client, site)


class TestGetText:
    async def test_sends_profile_headers(
        self, client: UpstreamClient, respx_mock: respx.MockRouter, site: SiteProfile
    ) -> None:
        route = respx_mock.get(PAGE).mock(return_value=httpx.Response(200, text="ok"))

        assert await client.get_text(PAGE) == "ok"

        sent = route.calls.last.request
        assert sent.headers["User-Agent"] == site.user_agent
        assert sent.headers["Referer"] == "https://multimovies.press/"
        assert sent.headers["sec-ch-ua-mobile"] == "?0"

    async def test_referer_override(
        self, client: UpstreamClient, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.get(PAGE).mock(return_value=httpx.Response(200))
        await client.get_text(PAGE, referer="https://elsewhere.example/")
        assert route.calls.last.request.headers["Referer"] == "https://elsewhere.example/"

    async def test_status_error(
        self, client: UpstreamClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(PAGE).mock(return_value=httpx.Response(503))
        with pytest.raises(UpstreamError, match="503"):
            await client.get_text(PAGE)

    async def test_transport_error(
        self, client: UpstreamClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(PAGE).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(UpstreamError):
            await client.get_text(PAGE)


class TestPostForm:
    async def test_json_reply(
        self, client: UpstreamClient, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.post(AJAX).mock(
            return_value=httpx.Response(200, json={"embed_url": "https://e/v/1"})
        )

        reply = await client.post_form(AJAX, {"action": "doo_player_ajax", "post": "1"})

        assert reply == {"embed_url": "https://e/v/1"}
        assert route.calls.last.request.content == b"action=doo_player_ajax&post=1"

    async def test_invalid_json(
        self, client: UpstreamClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.post(AJAX).mock(return_value=httpx.Response(200, text="<html>"))
        with pytest.raises(UpstreamError, match="Expected JSON"):
            await client.post_form(AJAX, {})
