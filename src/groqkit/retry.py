"""Minimal async retry driven by HTTP responses.

Design goals:
- Small API surface
- Explicit state (policy + attempt counter)
- Decisions based on status codes and headers only, never on message text
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from groqkit._http import RETRY_AFTER_HEADER

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    import httpx

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = 429


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy for transient server responses.

    Server errors (5xx) wait a fixed delay; 429 responses wait exactly as long
    as the ``retry-after`` header asks, with no backoff of our own.
    """

    max_retries: int = 1
    server_error_delay_ms: int = 1000

    def __post_init__(self) -> None:
        """Validate invariants to keep retry behavior predictable."""
        if self.max_retries < 0:
            raise ValueError("RetryPolicy.max_retries must be >= 0")
        if self.server_error_delay_ms < 0:
            raise ValueError("RetryPolicy.server_error_delay_ms must be >= 0")


def retry_after_ms(headers: Mapping[str, str]) -> int:
    """Return the ``retry-after`` header as milliseconds, or 0 if unusable."""
    raw = headers.get(RETRY_AFTER_HEADER)
    if raw is None:
        return 0
    try:
        seconds = int(raw.strip())
    except ValueError:
        return 0
    return max(seconds, 0) * 1000


def retry_delay_ms(
    status_code: int, headers: Mapping[str, str], policy: RetryPolicy
) -> int | None:
    """Return the delay before retrying, or None when the response is final."""
    if 500 <= status_code <= 599:
        return policy.server_error_delay_ms
    if status_code == TOO_MANY_REQUESTS:
        return retry_after_ms(headers)
    return None


async def send_with_retry(
    factory: Callable[[], Awaitable[httpx.Response]],
    *,
    policy: RetryPolicy,
) -> httpx.Response:
    """Send a request, retrying sequentially while the policy allows.

    ``factory`` must issue the same payload on every call. Discarded responses
    are closed before sleeping; the last response is returned as-is once the
    retry budget is spent.
    """
    retries = 0
    while True:
        response = await factory()
        delay_ms = retry_delay_ms(response.status_code, response.headers, policy)
        if delay_ms is None or retries >= policy.max_retries:
            return response

        retries += 1
        logger.info(
            "Retrying %s %s after status %d (retry %d/%d, delay %dms)",
            response.request.method,
            response.request.url.path,
            response.status_code,
            retries,
            policy.max_retries,
            delay_ms,
        )
        await response.aclose()
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
