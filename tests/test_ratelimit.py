"""Rate-limit header parsing: durations, sentinels and partial headers."""

from __future__ import annotations

from datetime import timedelta

from hypothesis import given
from hypothesis import strategies as st
import httpx
import pytest

from groqkit.ratelimit import (
    NEVER_RESETS,
    UNKNOWN_COUNT,
    RateLimit,
    extract_ratelimit,
    parse_duration,
)
from tests.helpers import RATELIMIT_HEADERS

pytestmark = pytest.mark.unit


# =============================================================================
# Durations
# =============================================================================


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("250ms", timedelta(milliseconds=250)),
        ("0ms", timedelta(0)),
        ("1m2.5s", timedelta(minutes=1, seconds=2.5)),
        ("2m0s", timedelta(minutes=2)),
        ("3.2s", timedelta(seconds=3.2)),
        ("6s", timedelta(seconds=6)),
    ],
)
def test_parse_duration_accepts_compact_forms(raw: str, expected: timedelta) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "garbage", "abcs", "1.5ms", "m5s", "7"])
def test_parse_duration_falls_back_to_zero(raw: str) -> None:
    """Unparsable input yields a zero duration instead of raising."""
    assert parse_duration(raw) == timedelta(0)


@given(st.text())
def test_parse_duration_never_raises(raw: str) -> None:
    assert isinstance(parse_duration(raw), timedelta)


# =============================================================================
# Header Extraction
# =============================================================================


def test_extract_ratelimit_reads_all_headers() -> None:
    limits = extract_ratelimit(httpx.Headers(RATELIMIT_HEADERS))

    assert limits == RateLimit(
        limit_requests=14400,
        limit_tokens=18000,
        remaining_requests=14399,
        remaining_tokens=17997,
        reset_requests=timedelta(seconds=6),
        reset_tokens=timedelta(milliseconds=10),
    )


def test_extract_ratelimit_is_case_insensitive_on_httpx_headers() -> None:
    headers = httpx.Headers({k.upper(): v for k, v in RATELIMIT_HEADERS.items()})

    limits = extract_ratelimit(headers)

    assert limits is not None
    assert limits.limit_tokens == 18000


def test_extract_ratelimit_without_limit_requests_is_none() -> None:
    headers = {
        k: v
        for k, v in RATELIMIT_HEADERS.items()
        if k != "x-ratelimit-limit-requests"
    }

    assert extract_ratelimit(headers) is None
    assert extract_ratelimit({}) is None


def test_extract_ratelimit_with_non_integer_limit_is_none() -> None:
    assert extract_ratelimit({"x-ratelimit-limit-requests": "lots"}) is None


def test_extract_ratelimit_uses_sentinels_for_missing_values() -> None:
    """Missing counts are -1 and missing resets never elapse; neither is zero."""
    limits = extract_ratelimit({"x-ratelimit-limit-requests": "30"})

    assert limits is not None
    assert limits.limit_requests == 30
    assert limits.limit_tokens == UNKNOWN_COUNT
    assert limits.remaining_requests == UNKNOWN_COUNT
    assert limits.remaining_tokens == UNKNOWN_COUNT
    assert limits.reset_requests == NEVER_RESETS
    assert limits.reset_tokens == NEVER_RESETS


def test_extract_ratelimit_keeps_unparsable_reset_as_zero() -> None:
    limits = extract_ratelimit(
        {"x-ratelimit-limit-requests": "30", "x-ratelimit-reset-tokens": "soon"}
    )

    assert limits is not None
    assert limits.reset_tokens == timedelta(0)
