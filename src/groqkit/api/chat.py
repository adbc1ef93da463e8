"""Chat completion request values.

Every type here is immutable and validated once, at construction. Invalid
shapes raise ``ConfigurationError`` before anything reaches the network.
Numeric sampling knobs are clamped into their legal ranges instead.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import StrEnum
import mimetypes
from pathlib import Path
from typing import Any, ClassVar, Literal

from groqkit.errors import ConfigurationError
from groqkit.models import ModelId

MAX_NAME_LENGTH = 64
MAX_TOOLS = 128

# --- Directives ---


class ChoiceMode(StrEnum):
    """Bare-string directives shared by ``tool_choice`` and ``function_call``."""

    NONE = "none"
    AUTO = "auto"


@dataclass(frozen=True)
class NamedFunctionCall:
    """Force a call to the named (legacy) function."""

    name: str

    def __post_init__(self) -> None:
        _check_name(self.name, "function name")


@dataclass(frozen=True)
class NamedToolChoice:
    """Force a call to the named tool."""

    name: str
    #: Encoded as ``"function"`` when None.
    type: str | None = "function"

    def __post_init__(self) -> None:
        _check_name(self.name, "tool name")


FunctionCallDirective = ChoiceMode | NamedFunctionCall
ToolChoice = ChoiceMode | NamedToolChoice

# --- Functions and tools ---


@dataclass(frozen=True)
class FunctionDefinition:
    """A callable function described to the model."""

    name: str
    description: str | None = None
    #: JSON Schema object describing the arguments.
    parameters: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        _check_name(self.name, "function name")


@dataclass(frozen=True)
class Tool:
    function: FunctionDefinition
    type: str = "function"


@dataclass(frozen=True)
class FunctionCall:
    """A function invocation produced by the model, echoed back in history."""

    name: str
    arguments: str


@dataclass(frozen=True)
class ToolCall:
    id: str
    function: FunctionCall
    type: str = "function"


# --- User content parts ---


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ImagePart:
    """An image given by remote URL or ``data:`` URI."""

    url: str
    detail: str | None = None

    @classmethod
    def from_bytes(
        cls, data: bytes, *, mime_type: str = "image/jpeg", detail: str | None = None
    ) -> ImagePart:
        """Inline raw image bytes as a base64 data URI."""
        encoded = base64.b64encode(data).decode("ascii")
        return cls(url=f"data:{mime_type};base64,{encoded}", detail=detail)

    @classmethod
    def from_file(cls, path: str | Path, *, detail: str | None = None) -> ImagePart:
        """Inline a local image file, guessing its MIME type from the extension."""
        p = Path(path)
        if not p.is_file():
            raise ConfigurationError(f"Image file not found: {p}")
        mime_type = mimetypes.guess_type(str(p))[0] or "image/jpeg"
        return cls.from_bytes(p.read_bytes(), mime_type=mime_type, detail=detail)


ContentPart = TextPart | ImagePart

# --- Messages ---


@dataclass(frozen=True)
class SystemMessage:
    role: ClassVar[Literal["system"]] = "system"

    content: str
    name: str | None = None


@dataclass(frozen=True)
class UserMessage:
    """A user turn: plain text, or a list of text and image parts."""

    role: ClassVar[Literal["user"]] = "user"

    content: str | tuple[ContentPart, ...]
    name: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.content, str):
            return
        parts = tuple(self.content)
        object.__setattr__(self, "content", parts)
        if not any(isinstance(p, (TextPart, ImagePart)) for p in parts):
            raise ConfigurationError(
                "user message content must include a text or image part",
                hint="Pass content='...' or include TextPart(...) / ImagePart(...).",
            )
        for p in parts:
            if not isinstance(p, (TextPart, ImagePart)):
                raise ConfigurationError(
                    f"Unsupported content part: {type(p).__name__}",
                    hint="Use TextPart or ImagePart.",
                )


@dataclass(frozen=True)
class AssistantMessage:
    role: ClassVar[Literal["assistant"]] = "assistant"

    content: str | None = None
    name: str | None = None
    tool_calls: tuple[ToolCall, ...] | None = None
    #: Deprecated by the service; prefer ``tool_calls``.
    function_call: FunctionCall | None = None

    def __post_init__(self) -> None:
        if self.tool_calls is not None:
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))


@dataclass(frozen=True)
class ToolMessage:
    """The result of a tool call, linked back by ``tool_call_id``."""

    role: ClassVar[Literal["tool"]] = "tool"

    content: str
    tool_call_id: str


@dataclass(frozen=True)
class FunctionMessage:
    """Deprecated by the service; prefer ``ToolMessage``."""

    role: ClassVar[Literal["function"]] = "function"

    content: str
    name: str


Message = SystemMessage | UserMessage | AssistantMessage | ToolMessage | FunctionMessage


def system(content: str, name: str | None = None) -> SystemMessage:
    return SystemMessage(content, name)


def text(content: str, name: str | None = None) -> UserMessage:
    """Plain-text user message."""
    return UserMessage(content, name)


def image(url: str, name: str | None = None) -> UserMessage:
    """Image-only user message."""
    return UserMessage((ImagePart(url),), name)


def user(
    content: str | None = None, image: str | None = None, name: str | None = None
) -> UserMessage:
    """User message with optional text and optional image, in parts form."""
    parts: list[ContentPart] = []
    if content is not None:
        parts.append(TextPart(content))
    if image is not None:
        parts.append(ImagePart(image))
    return UserMessage(tuple(parts), name)


def assistant(
    content: str | None = None,
    name: str | None = None,
    *,
    tool_calls: list[ToolCall] | tuple[ToolCall, ...] | None = None,
    function_call: FunctionCall | None = None,
) -> AssistantMessage:
    return AssistantMessage(
        content,
        name,
        tuple(tool_calls) if tool_calls is not None else None,
        function_call,
    )


def tool(content: str, tool_call_id: str) -> ToolMessage:
    return ToolMessage(content, tool_call_id)


def function(content: str, name: str) -> FunctionMessage:
    return FunctionMessage(content, name)


# --- Request ---


class ResponseFormat(StrEnum):
    TEXT = "text"
    JSON_OBJECT = "json_object"


@dataclass(frozen=True)
class StreamOptions:
    include_usage: bool | None = None


@dataclass(frozen=True)
class ChatCompletionRequest:
    """Immutable chat completion request.

    ``stream`` is owned by the client: ``GroqClient.chat`` forces it off and
    ``GroqClient.chat_stream`` forces it on.
    """

    messages: tuple[Message, ...]
    model: ModelId
    frequency_penalty: float | None = None
    #: Deprecated by the service; prefer ``tool_choice``.
    function_call: FunctionCallDirective | None = None
    #: Deprecated by the service; prefer ``tools``.
    functions: tuple[FunctionDefinition, ...] | None = None
    max_tokens: int | None = None
    n: int | None = None
    parallel_tool_calls: bool | None = None
    presence_penalty: float | None = None
    response_format: ResponseFormat | None = None
    seed: int | None = None
    stop: tuple[str, ...] | None = None
    stream: bool | None = None
    stream_options: StreamOptions | None = None
    temperature: float | None = None
    tool_choice: ToolChoice | None = None
    tools: tuple[Tool, ...] | None = None
    top_p: float | None = None
    user: str | None = None

    def __post_init__(self) -> None:
        """Validate shapes and clamp sampling knobs."""
        object.__setattr__(self, "messages", tuple(self.messages))
        if self.tools is not None:
            object.__setattr__(self, "tools", tuple(self.tools))
        if self.functions is not None:
            object.__setattr__(self, "functions", tuple(self.functions))
        if isinstance(self.stop, str):
            object.__setattr__(self, "stop", (self.stop,))
        elif self.stop is not None:
            object.__setattr__(self, "stop", tuple(self.stop))

        if not self.model:
            raise ConfigurationError(
                "model must be set", hint="Pass model=GroqModel.LLAMA_3_1_8B_INSTANT."
            )
        if not self.messages:
            raise ConfigurationError(
                "messages must not be empty",
                hint="Pass at least one message, e.g. messages=[text('Hello')].",
            )
        if self.n is not None and self.n != 1:
            raise ConfigurationError(
                f"n must be 1, got {self.n}", hint="Only n = 1 is currently supported."
            )
        if self.stream_options is not None and self.stream is not True:
            raise ConfigurationError(
                "stream_options requires stream=True",
                hint="Use GroqClient.chat_stream() when setting stream_options.",
            )
        if self.tools is not None and len(self.tools) > MAX_TOOLS:
            raise ConfigurationError(
                f"at most {MAX_TOOLS} tools are supported, got {len(self.tools)}"
            )
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be a positive integer")

        _clamp(self, "frequency_penalty", -2.0, 2.0)
        _clamp(self, "presence_penalty", -2.0, 2.0)
        _clamp(self, "temperature", -2.0, 2.0)
        _clamp(self, "top_p", 0.0, 1.0)


def _clamp(obj: object, attr: str, low: float, high: float) -> None:
    value = getattr(obj, attr)
    if value is not None:
        object.__setattr__(obj, attr, min(max(float(value), low), high))


def _check_name(name: str, label: str) -> None:
    if not name:
        raise ConfigurationError(f"{label} must not be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ConfigurationError(
            f"{label} must be <= {MAX_NAME_LENGTH} characters, got {len(name)}"
        )
