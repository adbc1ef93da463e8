"""Server-sent-event stream decoding.

A streaming completion arrives as newline-delimited text. Lines may carry a
``data: `` prefix; only lines whose payload is a JSON object are chunks.
Heartbeats, comments, blank lines and the final ``[DONE]`` sentinel are
skipped. A chunk that fails to decode is reported as a ``Failure`` for that
line and reading continues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

import httpx
from pydantic import ValidationError

from groqkit._http import CHAT_COMPLETIONS_ENDPOINT
from groqkit.api.responses import StreamingChatCompletion
from groqkit.envelope import transport_error
from groqkit.errors import GroqkitError, MalformedResponseError
from groqkit.result import Failure, Success

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator
    from types import TracebackType

    from groqkit.ratelimit import RateLimit

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
_PREVIEW_CHARS = 200

ChunkResult = Success[StreamingChatCompletion] | Failure[GroqkitError]


def decode_line(line: str) -> ChunkResult | None:
    """Decode one stream line; None means the line carries no chunk."""
    payload = line.removeprefix(DATA_PREFIX)
    if not payload.startswith("{"):
        return None
    try:
        return Success(StreamingChatCompletion.model_validate_json(payload))
    except ValidationError as e:
        logger.debug("Undecodable stream chunk: %s", payload[:_PREVIEW_CHARS])
        return Failure(
            MalformedResponseError(
                f"Stream chunk could not be decoded: {e.error_count()} error(s)",
                body=payload[:_PREVIEW_CHARS],
            )
        )


async def iter_chunks(lines: AsyncIterable[str]) -> AsyncIterator[ChunkResult]:
    """Yield one result per chunk line, in arrival order, until ``lines`` ends."""
    async for line in lines:
        result = decode_line(line)
        if result is not None:
            yield result


class StreamingResponse:
    """A single-use stream of chunk results plus the response's rate limits.

    Iterate with ``async for``. The stream is not restartable; closing it (or
    leaving the ``async with`` block) releases the underlying connection. A
    transport failure mid-stream is yielded as a final ``Failure``.
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        ratelimit: RateLimit | None,
        endpoint: str = CHAT_COMPLETIONS_ENDPOINT,
    ) -> None:
        self.ratelimit = ratelimit
        self._response = response
        self._chunks = self._read(response, endpoint)

    @staticmethod
    async def _read(
        response: httpx.Response, endpoint: str
    ) -> AsyncGenerator[ChunkResult, None]:
        try:
            async for result in iter_chunks(response.aiter_lines()):
                yield result
        except httpx.HTTPError as e:
            logger.debug("Stream interrupted: %s", e)
            yield Failure(transport_error(e, endpoint))
        finally:
            await response.aclose()

    def __aiter__(self) -> AsyncIterator[ChunkResult]:
        return self._chunks

    async def aclose(self) -> None:
        """Stop reading and close the connection."""
        await self._chunks.aclose()
        await self._response.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
