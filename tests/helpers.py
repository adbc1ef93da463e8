"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: scripted transports and canned wire
payloads shared by the client, envelope and streaming suites.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import json
from typing import Any

import httpx

TEST_API_KEY = "gsk_test_key"
TEST_MODEL = "llama-3.1-8b-instant"

RATELIMIT_HEADERS = {
    "x-ratelimit-limit-requests": "14400",
    "x-ratelimit-limit-tokens": "18000",
    "x-ratelimit-remaining-requests": "14399",
    "x-ratelimit-remaining-tokens": "17997",
    "x-ratelimit-reset-requests": "6s",
    "x-ratelimit-reset-tokens": "10ms",
}

ScriptEntry = httpx.Response | Callable[[httpx.Request], httpx.Response]


@dataclass
class ScriptedTransport(httpx.AsyncBaseTransport):
    """Transport double that replays a scripted sequence of responses.

    Each entry is either an ``httpx.Response`` or a callable receiving the
    request. Every request is recorded for assertions. Once the script is down
    to one entry, that entry is reused for all further requests.
    """

    script: list[ScriptEntry] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        entry = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(entry, httpx.Response):
            # Responses are single-use; hand out a fresh copy each time.
            return httpx.Response(
                entry.status_code, headers=entry.headers, content=entry.content
            )
        return entry(request)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


def json_response(
    status_code: int,
    payload: Any,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return httpx.Response(status_code, json=payload, headers=headers)


def sse_response(lines: list[str], headers: dict[str, str] | None = None):
    """A 200 response whose body is the given lines, newline-joined."""
    body = "\n".join(lines) + "\n"
    return httpx.Response(
        200,
        content=body.encode(),
        headers={"content-type": "text/event-stream", **(headers or {})},
    )


def completion_payload(content: str = "Hello there") -> dict[str, Any]:
    """A minimal ``chat/completions`` success body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1_726_000_000,
        "model": TEST_MODEL,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 3, "total_tokens": 8},
        "x_groq": {"id": "req_01"},
    }


def chunk_payload(content: str | None = "Hi", index: int = 0) -> dict[str, Any]:
    """A minimal streaming chunk body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1_726_000_000,
        "model": TEST_MODEL,
        "choices": [{"index": index, "delta": {"content": content}}],
    }


def chunk_line(content: str | None = "Hi") -> str:
    return "data: " + json.dumps(chunk_payload(content))


def model_payload(model_id: str = TEST_MODEL) -> dict[str, Any]:
    return {
        "id": model_id,
        "object": "model",
        "created": 1_693_721_698,
        "owned_by": "Meta",
        "active": True,
        "context_window": 131_072,
    }
