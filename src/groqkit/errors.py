"""Exception hierarchy for groqkit."""

from __future__ import annotations


class GroqkitError(Exception):
    """Base exception for all groqkit errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(GroqkitError):
    """Request construction or client configuration is invalid."""


class MalformedResponseError(GroqkitError):
    """A response body (or stream line) matched no expected shape."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.body = body


class APIError(GroqkitError):
    """API call failed at the HTTP or transport level.

    Carries enough metadata for callers to decide whether to try again later
    without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
        retry_after_s: float | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable
        self.status_code = status_code
        self.retry_after_s = retry_after_s
        self.endpoint = endpoint


class RateLimitError(APIError):
    """Rate limit exceeded (HTTP 429) and retries were exhausted."""


class VendorError(APIError):
    """The service answered with a structured ``{"error": {...}}`` envelope."""

    def __init__(
        self,
        message: str,
        type: str,  # noqa: A002 - mirrors the wire field
        *,
        retryable: bool | None = None,
        status_code: int | None = None,
        retry_after_s: float | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message,
            retryable=retryable,
            status_code=status_code,
            retry_after_s=retry_after_s,
            endpoint=endpoint,
        )
        self.message = message
        self.type = type
