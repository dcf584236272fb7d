"""Shared test fixtures for the reelscrape test suite."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx

from reelscrape.infrastructure.config.schema import SiteProfile

BASE_URL = "https://multimovies.press"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCache:
    """In-memory CachePort with TTL driven by a FakeClock."""

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock or FakeClock()
        self._data: dict[str, tuple[Any, float | None]] = {}
        self.set_calls: list[tuple[str, int | None]] = []

    async def __aenter__(self) -> FakeCache:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def get(self, key: str) -> Any:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        self.set_calls.append((key, ttl))
        expires_at = self.clock.now + ttl if ttl else None
        self._data[key] = (value, expires_at)

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def clear(self) -> None:
        self._data.clear()

    async def aclose(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Packed script helper
# ---------------------------------------------------------------------------


def build_packed_block(payload: str, words: list[str], radix: int = 36) -> str:
    """Wrap *payload* and *words* in a Dean Edwards packer invocation."""
    return (
        "eval(function(p,a,c,k,e,d){e=function(c){return c.toString(a)};"
        "if(!''.replace(/^/,String)){while(c--)d[c.toString(a)]=k[c]||c.toString(a);"
        "k=[function(e){return d[e]}];e=function(){return'\\\\w+'};c=1};"
        "while(c--)if(k[c])p=p.replace(new RegExp('\\\\b'+e(c)+'\\\\b','g'),k[c]);"
        f"return p}}('{payload}',{radix},{len(words)},'{'|'.join(words)}'.split('|'),0,{{}}))"
    )


# JWPlayer setup referencing an HLS manifest with the broken index parameter,
# one subtitle and one thumbnail track.
PLAYER_PAYLOAD = (
    "0().a({b:[{c:\"https://cdn.example/hls/master.m3u8?t=1&i=42,\\'.4&s=2\"}],"
    "d:[{c:\"https://cdn.example/subs/movie_eng.vtt\"},"
    "{c:\"https://cdn.example/thumbs/movie.vtt\"}]})"
)
PLAYER_WORDS = ["jwplayer", "", "", "", "", "", "", "", "", "", "setup", "sources", "file", "tracks"]
CLEAN_MANIFEST = "https://cdn.example/hls/master.m3u8?t=1&i=0.4&s=2"


def iframe_page(payload: str = PLAYER_PAYLOAD, words: list[str] | None = None) -> str:
    block = build_packed_block(payload, words if words is not None else PLAYER_WORDS)
    return f"<html><body><div id='player'></div><script>{block}</script></body></html>"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def site() -> SiteProfile:
    """Default multimovies profile."""
    return SiteProfile()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> FakeCache:
    return FakeCache(clock)


@pytest.fixture()
async def http_client() -> httpx.AsyncClient:
    """Plain httpx.AsyncClient (no retries) for use with respx mocking."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
