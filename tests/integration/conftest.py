"""Shared fixtures for integration tests.

These tests use real infrastructure components (DiskcacheAdapter,
load_config, the FastAPI lifespan) against a temporary directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from reelscrape.infrastructure.cache.diskcache_adapter import DiskcacheAdapter


@pytest.fixture()
async def diskcache(tmp_path: Path) -> DiskcacheAdapter:
    """Real DiskcacheAdapter backed by tmp_path (auto-cleaned)."""
    adapter = DiskcacheAdapter(
        directory=tmp_path / "cache",
        ttl_seconds=900,
        max_concurrent=5,
    )
    async with adapter:
        yield adapter


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop REELSCRAPE_* variables of the host environment."""
    for key in list(os.environ):
        if key.startswith("REELSCRAPE_"):
            monkeypatch.delenv(key)
