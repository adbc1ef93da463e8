"""Configuration: frozen Config with API key auto-resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

from groqkit._http import BASE_URL
from groqkit.errors import ConfigurationError
from groqkit.retry import RetryPolicy

load_dotenv()

API_KEY_ENV_VAR = "GROQ_API_KEY"
BASE_URL_ENV_VAR = "GROQ_BASE_URL"


@dataclass(frozen=True)
class Config:
    """Immutable client configuration.

    The API key is auto-resolved from ``GROQ_API_KEY`` (a ``.env`` file is
    honored) when not passed explicitly.

    Example:
        config = Config()  # key from GROQ_API_KEY
        config = Config(api_key="gsk_...", timeout_s=30.0)
    """

    #: Auto-resolved from ``GROQ_API_KEY`` when *None*.
    api_key: str | None = None
    #: Auto-resolved from ``GROQ_BASE_URL`` when *None*.
    base_url: str | None = None
    timeout_s: float = 60.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        """Auto-resolve environment values and validate."""
        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))
        if not self.api_key:
            raise ConfigurationError(
                "API key required",
                hint=f"Set {API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

        if self.base_url is None:
            object.__setattr__(
                self, "base_url", os.environ.get(BASE_URL_ENV_VAR) or BASE_URL
            )
        # httpx joins relative endpoint paths onto the base URL.
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds each HTTP request in seconds.",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_key={'[REDACTED]' if self.api_key else None}, "
            f"base_url={self.base_url!r}, timeout_s={self.timeout_s}, "
            f"retry={self.retry!r})"
        )

    __repr__ = __str__
