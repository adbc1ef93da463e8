"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, client fixtures and
automatic API test skipping. Environment fixtures are autouse.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from groqkit.config import Config
from groqkit.retry import RetryPolicy
from tests.helpers import TEST_API_KEY

# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def config() -> Config:
    """Config with a fake key and no server-error delay."""
    return Config(
        api_key=TEST_API_KEY,
        retry=RetryPolicy(max_retries=1, server_error_delay_ms=0),
    )


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry sleeps instead of waiting; returns the recorded seconds."""
    slept: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        slept.append(seconds)

    monkeypatch.setattr("groqkit.retry.asyncio.sleep", fake_sleep)
    return slept


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_groq_env(request, monkeypatch):
    """Ensure a clean GROQ_* environment for each test.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("GROQ_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


# =============================================================================
# API Test Configuration
# =============================================================================


@pytest.fixture
def groq_api_key():
    """Return GROQ_API_KEY or skip the test if unavailable."""
    key = os.getenv("GROQ_API_KEY")
    if not key:
        pytest.skip("GROQ_API_KEY not set")
    return key
