"""Integration test: create_app() lifespan wires real infrastructure."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from reelscrape.application.use_cases import StreamResolutionUseCase, TitleInfoUseCase
from reelscrape.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from reelscrape.infrastructure.config import AppConfig
from reelscrape.interfaces.app import create_app

pytestmark = pytest.mark.integration


def test_lifespan_builds_resources_per_site(tmp_path: Path) -> None:
    config = AppConfig.model_validate(
        {
            "cache": {"dir": str(tmp_path / "cache")},
            "sites": {
                "multimovies": {},
                "mirror": {"base_url": "https://mirror.example", "host_family": "mirror"},
            },
        }
    )
    app = create_app(config)

    with TestClient(app) as client:
        assert client.get("/health").text == "OK"

        state = app.state
        assert isinstance(state.cache, DiskcacheAdapter)
        assert isinstance(state.http_client, httpx.AsyncClient)
        assert set(state.info_use_cases) == {"multimovies", "mirror"}
        assert isinstance(state.info_use_cases["mirror"], TitleInfoUseCase)
        assert isinstance(state.stream_use_cases["mirror"], StreamResolutionUseCase)

        banner = client.get("/").text
        assert "/api/mirror/stream?url=" in banner

    assert state.http_client.is_closed
