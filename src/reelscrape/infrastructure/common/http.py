"""Shared httpx client factory."""

from __future__ import annotations

import httpx
import structlog

from reelscrape.infrastructure.common.retry_transport import RetryPolicy, RetryTransport
from reelscrape.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    """One AsyncClient for all upstream calls, retries applied in the transport.

    Headers are not set here; each site profile passes its own header set
    per request.
    """
    policy = RetryPolicy(
        max_attempts=config.http_retry_max_attempts,
        backoff_base=config.http_retry_backoff_base,
    )
    transport = RetryTransport(wrapped=httpx.AsyncHTTPTransport(), policy=policy)
    log.info(
        "http_client_created",
        timeout=config.http_timeout_seconds,
        max_attempts=policy.max_attempts,
        backoff_base=policy.backoff_base,
    )
    return httpx.AsyncClient(
        transport=transport,
        timeout=config.http_timeout_seconds,
        follow_redirects=True,
    )
