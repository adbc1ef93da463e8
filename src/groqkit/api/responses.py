"""Response-side models decoded from the service's JSON.

Unknown keys are ignored so additive server changes do not break decoding.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Usage(_WireModel):
    """Token and timing usage for one completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    #: Seconds spent queued, generating the prompt, the completion, in total.
    queue_time: float | None = None
    prompt_time: float | None = None
    completion_time: float | None = None
    total_time: float | None = None


class XGroq(_WireModel):
    """Vendor metadata carried under the ``x_groq`` key."""

    id: str | None = None
    usage: Usage | None = None


class ResponseFunctionCall(_WireModel):
    name: str
    arguments: str = "{}"


class ResponseToolCall(_WireModel):
    id: str
    type: str = "function"
    function: ResponseFunctionCall


class ChatCompletionMessage(_WireModel):
    """Message returned by the model in a non-streaming completion."""

    role: str
    content: str | None = None
    tool_calls: list[ResponseToolCall] | None = None
    function_call: ResponseFunctionCall | None = None


class ChatCompletionChoice(_WireModel):
    index: int
    message: ChatCompletionMessage
    finish_reason: str | None = None


class ChatCompletion(_WireModel):
    """A complete chat completion."""

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: list[ChatCompletionChoice]
    usage: Usage | None = None
    system_fingerprint: str | None = None


class ChatCompletionDelta(_WireModel):
    """Incremental update of one choice.

    Both fields may be absent from any given chunk; accumulating partial
    content across chunks is left to the caller.
    """

    role: str | None = None
    content: str | None = None
    tool_calls: list[dict[str, Any]] | None = None


class StreamingChatCompletionChoice(_WireModel):
    index: int
    delta: ChatCompletionDelta
    finish_reason: str | None = None


class StreamingChatCompletion(_WireModel):
    """One chunk of a streaming chat completion."""

    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: list[StreamingChatCompletionChoice]
    usage: Usage | None = None
    system_fingerprint: str | None = None
    x_groq: XGroq | None = None


class TranscriptionSegment(_WireModel):
    id: int
    seek: float
    start: float
    end: float
    text: str
    tokens: list[int] = Field(default_factory=list)
    temperature: float = 0.0
    avg_logprob: float = 0.0
    compression_ratio: float = 0.0
    no_speech_prob: float = 0.0


class AudioTranscription(_WireModel):
    """Transcription result; the extra fields only come with ``verbose_json``."""

    text: str
    task: str | None = None
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptionSegment] | None = None


class AudioTranslation(_WireModel):
    text: str


class Model(_WireModel):
    """A model resource as listed by ``/models``."""

    id: str
    object: str = "model"
    created: int
    owned_by: str
    active: bool = True
    context_window: int | None = None


class Models(_WireModel):
    object: str = "list"
    data: list[Model]
