"""httpx transport applying a retry policy to network-class failures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import structlog

log = structlog.get_logger(__name__)

_DEFAULT_RETRYABLE = frozenset({429, 502, 503, 504})


def is_transient_error(exc: Exception) -> bool:
    """Connect errors, timeouts and protocol errors are worth another try."""
    return isinstance(exc, httpx.TransportError)


@dataclass(frozen=True)
class RetryPolicy:
    """Max attempts, linear backoff and the retryable-failure predicates.

    ``max_attempts`` counts the first try, so 3 means up to two retries.
    """

    max_attempts: int = 3
    backoff_base: float = 1.0
    retryable_status_codes: frozenset[int] = _DEFAULT_RETRYABLE
    is_retryable_error: Callable[[Exception], bool] = field(
        default=is_transient_error
    )

    def delay(self, attempt: int) -> float:
        """Backoff before retry number *attempt* (1-based): base * attempt."""
        return self.backoff_base * attempt


class RetryTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx transport and retries transient failures.

    Retries on exceptions accepted by ``policy.is_retryable_error`` and on
    ``policy.retryable_status_codes``. When attempts are exhausted the last
    response is returned or the last error re-raised. Parsing failures happen
    above the transport and are never retried.
    """

    def __init__(
        self,
        wrapped: httpx.AsyncBaseTransport,
        policy: RetryPolicy | None = None,
    ) -> None:
        self._wrapped = wrapped
        self._policy = policy or RetryPolicy()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send *request* through the wrapped transport, retrying per policy."""
        policy = self._policy

        for attempt in range(1, policy.max_attempts + 1):
            last = attempt == policy.max_attempts
            try:
                response = await self._wrapped.handle_async_request(request)
            except Exception as exc:
                if last or not policy.is_retryable_error(exc):
                    raise
                reason = type(exc).__name__
            else:
                if response.status_code not in policy.retryable_status_codes or last:
                    return response
                # Read + close the retryable response before retrying
                await response.aread()
                await response.aclose()
                reason = str(response.status_code)

            delay = policy.delay(attempt)
            log.info(
                "http_retry",
                method=request.method,
                url=str(request.url),
                reason=reason,
                attempt=attempt,
                delay=round(delay, 2),
            )
            await asyncio.sleep(delay)

        # Unreachable, but satisfies type checker
        raise RuntimeError("retry loop exited without a response")  # pragma: no cover

    async def aclose(self) -> None:
        """Close the wrapped transport."""
        await self._wrapped.aclose()
