"""Rate-limit metadata read from response headers.

The service reports quota state through ``x-ratelimit-*`` headers. Counts
missing from a partially populated response are reported as ``-1`` and reset
times as ``NEVER_RESETS``, so an unknown value is never mistaken for zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from groqkit._http import (
    LIMIT_REQUESTS_HEADER,
    LIMIT_TOKENS_HEADER,
    REMAINING_REQUESTS_HEADER,
    REMAINING_TOKENS_HEADER,
    RESET_REQUESTS_HEADER,
    RESET_TOKENS_HEADER,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN_COUNT = -1
NEVER_RESETS = timedelta.max
ZERO_DURATION = timedelta(0)


@dataclass(frozen=True, slots=True)
class RateLimit:
    """Point-in-time snapshot of the quota headers of one response."""

    limit_requests: int
    limit_tokens: int
    remaining_requests: int
    remaining_tokens: int
    reset_requests: timedelta
    reset_tokens: timedelta


def parse_duration(value: str) -> timedelta:
    """Parse a compact duration such as ``"123ms"``, ``"1m2.34s"`` or ``"1s"``.

    Best effort: never raises. Any unparsable component yields a zero duration.
    """
    try:
        if "ms" in value:
            return timedelta(milliseconds=int(value[:-2]))
        if "m" in value and "s" in value:
            minutes, _, rest = value.partition("m")
            seconds = rest.partition("s")[0]
            return timedelta(minutes=int(minutes), seconds=float(seconds))
        if "s" in value:
            return timedelta(seconds=float(value.replace("s", "")))
    except (ValueError, OverflowError):
        return ZERO_DURATION
    return ZERO_DURATION


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _duration_header(headers: Mapping[str, str], name: str) -> timedelta | None:
    raw = headers.get(name)
    if raw is None:
        return None
    return parse_duration(raw.strip())


def extract_ratelimit(headers: Mapping[str, str]) -> RateLimit | None:
    """Build a ``RateLimit`` from response headers.

    Returns None when ``x-ratelimit-limit-requests`` is absent or not an
    integer; the whole snapshot is treated as unavailable in that case.
    """
    limit_requests = _int_header(headers, LIMIT_REQUESTS_HEADER)
    if limit_requests is None:
        return None

    def count(name: str) -> int:
        value = _int_header(headers, name)
        return UNKNOWN_COUNT if value is None else value

    def reset(name: str) -> timedelta:
        value = _duration_header(headers, name)
        return NEVER_RESETS if value is None else value

    return RateLimit(
        limit_requests=limit_requests,
        limit_tokens=count(LIMIT_TOKENS_HEADER),
        remaining_requests=count(REMAINING_REQUESTS_HEADER),
        remaining_tokens=count(REMAINING_TOKENS_HEADER),
        reset_requests=reset(RESET_REQUESTS_HEADER),
        reset_tokens=reset(RESET_TOKENS_HEADER),
    )
