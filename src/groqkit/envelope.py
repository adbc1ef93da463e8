"""Response envelope decoding.

Every endpoint answers with either its own payload or a vendor error object::

    {"error": {"message": "...", "type": "invalid_request_error"}}

``decode_envelope`` tells the two apart independently of the endpoint. The
``parse_*`` helpers turn a whole ``httpx.Response`` into a ``Result``: the
body decides success or vendor failure, and rate-limit data is read from the
headers and attached separately.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ValidationError

from groqkit.api.responses import Usage, XGroq
from groqkit.errors import (
    APIError,
    GroqkitError,
    MalformedResponseError,
    RateLimitError,
    VendorError,
)
from groqkit.ratelimit import RateLimit, extract_ratelimit
from groqkit.result import Failure, Result, Success
from groqkit.retry import TOO_MANY_REQUESTS, retry_after_ms

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

_VENDOR_META_KEY = "x_groq"
_BODY_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class GroqResponse[T]:
    """A decoded success payload plus the metadata that came with it."""

    data: T
    usage: Usage | None = None
    x_groq: XGroq | None = None
    ratelimit: RateLimit | None = None


@dataclass(frozen=True)
class Ok[T]:
    data: T
    usage: Usage | None = None
    x_groq: XGroq | None = None


@dataclass(frozen=True)
class ErrorEnvelope:
    message: str
    type: str


Envelope = Ok[Any] | ErrorEnvelope


def _preview(text: str) -> str:
    if len(text) <= _BODY_PREVIEW_CHARS:
        return text
    return text[:_BODY_PREVIEW_CHARS] + "..."


def _optional[M: BaseModel](model: type[M], raw: Any) -> M | None:
    """Decode an optional nested object; absent or malformed means None."""
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError:
        logger.debug("Ignoring malformed %s block: %r", model.__name__, raw)
        return None


def decode_envelope[M: BaseModel](
    payload: Any, data_type: type[M]
) -> Ok[M] | ErrorEnvelope:
    """Classify a decoded JSON body as a vendor error or a success payload.

    Raises:
        MalformedResponseError: The body matches neither shape.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    if "error" in payload:
        return _decode_error(payload["error"])

    try:
        data = data_type.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response does not match {data_type.__name__}: "
            f"{e.error_count()} validation error(s)",
            body=_preview(repr(payload)),
        ) from e

    return Ok(
        data=data,
        usage=_optional(Usage, payload.get("usage")),
        x_groq=_optional(XGroq, payload.get(_VENDOR_META_KEY)),
    )


def _decode_error(error: Any) -> ErrorEnvelope:
    message = error.get("message") if isinstance(error, dict) else None
    if not isinstance(message, str):
        raise MalformedResponseError(
            "Error envelope is missing a string 'message'", body=repr(error)
        )
    error_type = error.get("type")
    return ErrorEnvelope(
        message=message,
        type=error_type if isinstance(error_type, str) else "unknown_error",
    )


def http_status_error(
    status_code: int,
    reason: str,
    headers: Mapping[str, str],
    *,
    endpoint: str | None = None,
) -> APIError:
    """Build the failure for a non-success status without a vendor envelope."""
    message = f"{endpoint or 'request'} failed (status={status_code}): {reason}"
    if status_code == TOO_MANY_REQUESTS:
        return RateLimitError(
            message,
            hint="Rate limit exceeded; wait and retry, or lower request volume.",
            retryable=True,
            status_code=status_code,
            retry_after_s=retry_after_ms(headers) / 1000,
            endpoint=endpoint,
        )
    hint = None
    if status_code in {401, 403}:
        hint = "Check credentials (set GROQ_API_KEY or pass Config(api_key=...))."
    return APIError(
        message,
        hint=hint,
        retryable=500 <= status_code <= 599,
        status_code=status_code,
        endpoint=endpoint,
    )



def transport_error(exc: httpx.HTTPError, endpoint: str) -> APIError:
    """Map an ``httpx`` transport failure into an APIError."""
    retryable = isinstance(exc, httpx.TimeoutException)
    detail = str(exc) or type(exc).__name__
    return APIError(
        f"{endpoint} request failed: {detail}",
        hint="Check network connectivity or raise Config.timeout_s."
        if retryable
        else None,
        retryable=retryable,
        endpoint=endpoint,
    )


def failure_from_response(
    response: httpx.Response, endpoint: str
) -> Failure[GroqkitError]:
    """Turn a non-success response into a failure, preferring the vendor error."""
    try:
        payload = response.json()
        if isinstance(payload, dict) and "error" in payload:
            envelope = _decode_error(payload["error"])
            return Failure(_vendor_error(envelope, response, endpoint))
    except (ValueError, MalformedResponseError):
        pass
    return Failure(
        http_status_error(
            response.status_code,
            response.reason_phrase,
            response.headers,
            endpoint=endpoint,
        )
    )


def _vendor_error(
    envelope: ErrorEnvelope, response: httpx.Response, endpoint: str
) -> VendorError:
    status_code = response.status_code
    rate_limited = status_code == TOO_MANY_REQUESTS
    retry_after_s = retry_after_ms(response.headers) / 1000 if rate_limited else None
    return VendorError(
        envelope.message,
        envelope.type,
        retryable=rate_limited or 500 <= status_code <= 599,
        status_code=status_code,
        retry_after_s=retry_after_s,
        endpoint=endpoint,
    )


def parse_response[M: BaseModel](
    response: httpx.Response, data_type: type[M], *, endpoint: str
) -> Result[GroqResponse[M], GroqkitError]:
    """Decode a buffered response through the envelope."""
    try:
        payload = response.json()
    except ValueError:
        if not response.is_success:
            return failure_from_response(response, endpoint)
        return Failure(
            MalformedResponseError(
                f"{endpoint} returned a non-JSON body",
                body=_preview(response.text),
            )
        )

    try:
        envelope = decode_envelope(payload, data_type)
    except MalformedResponseError as e:
        if not response.is_success:
            return failure_from_response(response, endpoint)
        return Failure(e)

    match envelope:
        case ErrorEnvelope():
            return Failure(_vendor_error(envelope, response, endpoint))
        case Ok(data=data, usage=usage, x_groq=x_groq):
            return Success(
                GroqResponse(
                    data=data,
                    usage=usage,
                    x_groq=x_groq,
                    ratelimit=extract_ratelimit(response.headers),
                )
            )


def parse_text_response[T](
    response: httpx.Response, wrap: Callable[[str], T], *, endpoint: str
) -> Result[GroqResponse[T], GroqkitError]:
    """Wrap a plain-text success body; errors still go through the envelope."""
    if not response.is_success:
        return failure_from_response(response, endpoint)
    return Success(
        GroqResponse(
            data=wrap(response.text),
            ratelimit=extract_ratelimit(response.headers),
        )
    )


def validate_response[M: BaseModel](
    response: httpx.Response, data_type: type[M], *, endpoint: str
) -> Result[M, GroqkitError]:
    """Decode a body that is not wrapped in the envelope (status check only)."""
    if not response.is_success:
        return Failure(
            http_status_error(
                response.status_code,
                response.reason_phrase,
                response.headers,
                endpoint=endpoint,
            )
        )
    try:
        return Success(data_type.model_validate_json(response.content))
    except ValidationError:
        return Failure(
            MalformedResponseError(
                f"{endpoint} response does not match {data_type.__name__}",
                body=_preview(response.text),
            )
        )
