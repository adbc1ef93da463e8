"""Async client for the chat, audio and models endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import replace
import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

from groqkit._http import (
    CHAT_COMPLETIONS_ENDPOINT,
    MODELS_ENDPOINT,
    TRANSCRIPTIONS_ENDPOINT,
    TRANSLATIONS_ENDPOINT,
    USER_AGENT,
    model_endpoint,
)
from groqkit.api.audio import (
    AudioResponseFormat,
    encode_transcription_form,
    encode_translation_form,
)
from groqkit.api.codec import encode_chat_request
from groqkit.api.responses import (
    AudioTranscription,
    AudioTranslation,
    ChatCompletion,
    Model,
    Models,
)
from groqkit.config import Config
from groqkit.envelope import (
    GroqResponse,
    failure_from_response,
    parse_response,
    parse_text_response,
    transport_error,
    validate_response,
)
from groqkit.errors import GroqkitError
from groqkit.models import model_id
from groqkit.ratelimit import extract_ratelimit
from groqkit.result import Failure, Result, Success
from groqkit.retry import send_with_retry
from groqkit.streaming import StreamingResponse

if TYPE_CHECKING:
    from types import TracebackType

    from groqkit.api.audio import TranscriptionRequest, TranslationRequest
    from groqkit.api.chat import ChatCompletionRequest
    from groqkit.models import ModelId

logger = logging.getLogger(__name__)


class GroqClient:
    """Client for the Groq OpenAI-compatible API.

    Every endpoint method returns a ``Success`` or ``Failure`` instead of
    raising. Only invalid request construction raises, before any I/O.

    Example:
        async with GroqClient() as client:
            result = await client.chat(
                ChatCompletionRequest(
                    messages=(text("Hello"),), model=GroqModel.LLAMA_3_1_8B_INSTANT
                )
            )
            match result:
                case Success(value=response):
                    print(response.data.choices[0].message.content)
                case Failure(error=error):
                    print(f"failed: {error}")
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with a config; ``transport`` replaces the network for tests."""
        self.config = config if config is not None else Config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily initialize and return the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url or "",
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "User-Agent": USER_AGENT,
                },
                timeout=self.config.timeout_s,
                transport=self._transport,
            )
        return self._client

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        files: Any = None,
        stream: bool = False,
    ) -> httpx.Response:
        client = self._get_client()

        async def attempt() -> httpx.Response:
            request = client.build_request(method, endpoint, json=json, files=files)
            return await client.send(request, stream=stream)

        logger.debug("%s %s (stream=%s)", method, endpoint, stream)
        return await send_with_retry(attempt, policy=self.config.retry)

    async def chat(
        self, request: ChatCompletionRequest
    ) -> Result[GroqResponse[ChatCompletion], GroqkitError]:
        """Create a model response for the given conversation."""
        body = encode_chat_request(replace(request, stream=False))
        try:
            response = await self._send("POST", CHAT_COMPLETIONS_ENDPOINT, json=body)
        except httpx.HTTPError as e:
            return Failure(transport_error(e, CHAT_COMPLETIONS_ENDPOINT))
        return parse_response(
            response, ChatCompletion, endpoint=CHAT_COMPLETIONS_ENDPOINT
        )

    async def chat_stream(
        self, request: ChatCompletionRequest
    ) -> Result[StreamingResponse, GroqkitError]:
        """Stream a model response for the given conversation.

        On success the caller owns the returned stream and should close it,
        ideally with ``async with``.
        """
        body = encode_chat_request(replace(request, stream=True))
        try:
            response = await self._send(
                "POST", CHAT_COMPLETIONS_ENDPOINT, json=body, stream=True
            )
        except httpx.HTTPError as e:
            return Failure(transport_error(e, CHAT_COMPLETIONS_ENDPOINT))

        if not response.is_success:
            try:
                await response.aread()
            except httpx.HTTPError as e:
                return Failure(transport_error(e, CHAT_COMPLETIONS_ENDPOINT))
            finally:
                await response.aclose()
            return failure_from_response(response, CHAT_COMPLETIONS_ENDPOINT)

        return Success(
            StreamingResponse(
                response,
                ratelimit=extract_ratelimit(response.headers),
                endpoint=CHAT_COMPLETIONS_ENDPOINT,
            )
        )

    async def transcribe_audio(
        self, request: TranscriptionRequest
    ) -> Result[GroqResponse[AudioTranscription], GroqkitError]:
        """Transcribe audio into text in its spoken language."""
        try:
            response = await self._send(
                "POST",
                TRANSCRIPTIONS_ENDPOINT,
                files=encode_transcription_form(request),
            )
        except httpx.HTTPError as e:
            return Failure(transport_error(e, TRANSCRIPTIONS_ENDPOINT))
        if request.response_format is AudioResponseFormat.TEXT:
            return parse_text_response(
                response,
                lambda body: AudioTranscription(text=body),
                endpoint=TRANSCRIPTIONS_ENDPOINT,
            )
        return parse_response(
            response, AudioTranscription, endpoint=TRANSCRIPTIONS_ENDPOINT
        )

    async def translate_audio(
        self, request: TranslationRequest
    ) -> Result[GroqResponse[AudioTranslation], GroqkitError]:
        """Translate audio into English text."""
        try:
            response = await self._send(
                "POST",
                TRANSLATIONS_ENDPOINT,
                files=encode_translation_form(request),
            )
        except httpx.HTTPError as e:
            return Failure(transport_error(e, TRANSLATIONS_ENDPOINT))
        if request.response_format is AudioResponseFormat.TEXT:
            return parse_text_response(
                response,
                lambda body: AudioTranslation(text=body),
                endpoint=TRANSLATIONS_ENDPOINT,
            )
        return parse_response(
            response, AudioTranslation, endpoint=TRANSLATIONS_ENDPOINT
        )

    async def fetch_model(
        self, model: ModelId
    ) -> Result[GroqResponse[Model], GroqkitError]:
        """Fetch a single model by ID."""
        endpoint = model_endpoint(model_id(model))
        try:
            response = await self._send("GET", endpoint)
        except httpx.HTTPError as e:
            return Failure(transport_error(e, endpoint))
        return parse_response(response, Model, endpoint=endpoint)

    async def list_models(self) -> Result[list[Model], GroqkitError]:
        """List the models currently available."""
        try:
            response = await self._send("GET", MODELS_ENDPOINT)
        except httpx.HTTPError as e:
            return Failure(transport_error(e, MODELS_ENDPOINT))
        match validate_response(response, Models, endpoint=MODELS_ENDPOINT):
            case Success(value=models):
                return Success(models.data)
            case Failure() as failure:
                return failure

    async def aclose(self) -> None:
        """Close underlying HTTP client resources."""
        client = self._client
        if client is None:
            return
        self._client = None
        try:
            await client.aclose()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("HTTP client cleanup failed: %s", exc)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
