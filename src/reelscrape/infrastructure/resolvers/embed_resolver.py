"""Embed resolver: third-party iframe URL to the final player URL.

Player iframes returned by ``doo_player_ajax`` often point at a mirror host
that needs one more hop:

1. ``HEAD`` the iframe origin and follow redirects to the canonical mirror.
2. ``POST /embedhelper.php`` with ``sid=<player id>``.
3. Join ``siteUrls[key]`` with ``mresult[key]`` (base64 JSON or plain dict).

Each hop is best-effort. When a hop fails, the best URL known so far is
kept, since many pages do not need the helper at all.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

import httpx
import structlog

from reelscrape.domain.entities.media import EmbedResolution
from reelscrape.infrastructure.common.urls import (
    hostname_of,
    last_path_segment,
    origin_of,
)
from reelscrape.infrastructure.config.schema import SiteProfile

log = structlog.get_logger(__name__)


def decode_site_id(mresult: Any, key: str) -> str | None:
    """Site id from ``mresult``: base64-encoded JSON first, plain dict second.

    Both the standard and the URL-safe base64 alphabet are accepted.
    """
    if isinstance(mresult, str) and mresult:
        padded = mresult + "=" * (-len(mresult) % 4)
        try:
            decoded = json.loads(base64.urlsafe_b64decode(padded).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError):
            decoded = None
        if isinstance(decoded, dict) and decoded.get(key):
            return str(decoded[key])
    if isinstance(mresult, dict) and mresult.get(key):
        return str(mresult[key])
    return None


class EmbedResolver:
    """Resolves player iframe URLs for one site profile."""

    def __init__(self, http_client: httpx.AsyncClient, site: SiteProfile) -> None:
        self._client = http_client
        self._site = site

    def is_first_party(self, iframe_url: str) -> bool:
        """True when the iframe host belongs to the site family."""
        return self._site.host_family in hostname_of(iframe_url)

    async def _probe_origin(self, origin: str) -> str:
        """Origin after redirects; the input origin on any failure."""
        try:
            resp = await self._client.head(
                origin,
                headers=self._site.request_headers(),
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            log.info(
                "embed_redirect_probe_failed",
                origin=origin,
                error=str(exc) or type(exc).__name__,
            )
            return origin

        final = origin_of(str(resp.url))
        if final != origin:
            log.debug("embed_origin_redirected", origin=origin, final=final)
        return final

    async def _call_helper(self, origin: str, player_id: str) -> str | None:
        """Resolved iframe URL from the embed helper, ``None`` if unusable."""
        helper_url = f"{origin}{self._site.embed_helper_path}"
        key = self._site.embed_helper_key
        try:
            resp = await self._client.post(
                helper_url,
                data={"sid": player_id},
                headers=self._site.request_headers(),
            )
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            log.warning(
                "embed_helper_failed",
                url=helper_url,
                player_id=player_id,
                error=str(exc) or type(exc).__name__,
            )
            return None

        if not isinstance(payload, dict):
            log.warning("embed_helper_unexpected_payload", url=helper_url)
            return None

        site_urls = payload.get("siteUrls")
        prefix = site_urls.get(key) if isinstance(site_urls, dict) else None
        site_id = decode_site_id(payload.get("mresult"), key)
        if not prefix or not site_id:
            log.info(
                "embed_helper_incomplete",
                url=helper_url,
                has_prefix=bool(prefix),
                has_site_id=bool(site_id),
            )
            return None
        return f"{prefix}{site_id}"

    async def resolve(self, iframe_url: str) -> EmbedResolution:
        """Final iframe URL for *iframe_url*; never raises for hop failures."""
        if self.is_first_party(iframe_url):
            return EmbedResolution(iframe_url=iframe_url, origin=origin_of(iframe_url))

        origin = await self._probe_origin(origin_of(iframe_url))
        player_id = last_path_segment(iframe_url)
        if not player_id:
            log.info("embed_player_id_missing", iframe_url=iframe_url)
            return EmbedResolution(iframe_url=iframe_url, origin=origin)

        resolved = await self._call_helper(origin, player_id)
        if resolved is None:
            return EmbedResolution(
                iframe_url=iframe_url, origin=origin, player_id=player_id
            )

        log.info("embed_resolved", iframe_url=iframe_url, resolved=resolved)
        return EmbedResolution(
            iframe_url=resolved,
            origin=origin,
            player_id=player_id,
            via_helper=True,
        )
