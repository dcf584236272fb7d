"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "reelscrape",
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "retry_max_attempts": 3,
        "retry_backoff_base": 1.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "backend": "diskcache",
        "dir": "./.cache/reelscrape",
        "redis_url": "redis://localhost:6379/0",
        "ttl_seconds": 900,
        "max_concurrent": 10,
    },
    "api": {
        "cors_allow_origins": ["*"],
    },
    "sites": {
        # Field defaults of SiteProfile describe multimovies.press.
        "multimovies": {},
    },
}
