"""Upstream site client: profile headers + error translation."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from reelscrape.domain.exceptions import UpstreamError
from reelscrape.infrastructure.config.schema import SiteProfile

log = structlog.get_logger(__name__)


class UpstreamClient:
    """Fetches pages of one site profile.

    Transport errors (after the retry transport gave up) and non-2xx
    statuses surface as ``UpstreamError``.
    """

    def __init__(self, http_client: httpx.AsyncClient, site: SiteProfile) -> None:
        self._client = http_client
        self._site = site

    def _headers(self, referer: str | None) -> dict[str, str]:
        headers = self._site.request_headers()
        if referer:
            headers["Referer"] = referer
        return headers

    async def _send(
        self, method: str, url: str, *, referer: str | None, **kwargs: Any
    ) -> httpx.Response:
        try:
            resp = await self._client.request(
                method, url, headers=self._headers(referer), **kwargs
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "upstream_http_error",
                method=method,
                url=url,
                status=exc.response.status_code,
            )
            raise UpstreamError(
                f"Upstream returned {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            log.warning(
                "upstream_fetch_error",
                method=method,
                url=url,
                error=str(exc) or type(exc).__name__,
            )
            raise UpstreamError(f"Failed to fetch {url}: {exc!r}") from exc
        return resp

    async def get_text(self, url: str, *, referer: str | None = None) -> str:
        resp = await self._send("GET", url, referer=referer)
        return resp.text

    async def post_form(
        self, url: str, data: dict[str, str], *, referer: str | None = None
    ) -> Any:
        """POST a form and decode the JSON reply."""
        resp = await self._send("POST", url, referer=referer, data=data)
        try:
            return resp.json()
        except ValueError as exc:
            log.warning("upstream_invalid_json", url=url)
            raise UpstreamError(f"Expected JSON from {url}") from exc
