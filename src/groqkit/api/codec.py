"""Wire encoding for chat request values.

Each union is matched exhaustively, one branch per variant, because the
service uses a different JSON shape per variant: bare strings for the simple
directives, nested objects for named ones, and a per-role field set for
messages. Optional fields are omitted rather than sent as null.

Decoders are provided for the same shapes so that transcripts stored as JSON
can be turned back into request values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, assert_never

from groqkit.api.chat import (
    AssistantMessage,
    ChoiceMode,
    FunctionCall,
    FunctionDefinition,
    FunctionMessage,
    ImagePart,
    NamedFunctionCall,
    NamedToolChoice,
    SystemMessage,
    TextPart,
    Tool,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from groqkit.errors import ConfigurationError, MalformedResponseError
from groqkit.models import model_id

if TYPE_CHECKING:
    from groqkit.api.chat import (
        ChatCompletionRequest,
        ContentPart,
        FunctionCallDirective,
        Message,
        ToolChoice,
    )


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


# --- Directives ---


def encode_function_call(directive: FunctionCallDirective) -> str | dict[str, Any]:
    match directive:
        case ChoiceMode():
            return directive.value
        case NamedFunctionCall(name=name):
            return {"name": name}
        case _:
            assert_never(directive)


def encode_tool_choice(choice: ToolChoice) -> str | dict[str, Any]:
    match choice:
        case ChoiceMode():
            return choice.value
        case NamedToolChoice(name=name, type=type_):
            return {"type": type_ or "function", "function": {"name": name}}
        case _:
            assert_never(choice)


def decode_function_call(raw: Any) -> FunctionCallDirective:
    if isinstance(raw, str):
        return _decode_mode(raw)
    if isinstance(raw, dict) and isinstance(raw.get("name"), str):
        return NamedFunctionCall(raw["name"])
    raise MalformedResponseError(f"Invalid function_call directive: {raw!r}")


def decode_tool_choice(raw: Any) -> ToolChoice:
    if isinstance(raw, str):
        return _decode_mode(raw)
    if isinstance(raw, dict):
        fn = raw.get("function")
        if isinstance(fn, dict) and isinstance(fn.get("name"), str):
            return NamedToolChoice(fn["name"], raw.get("type", "function"))
    raise MalformedResponseError(f"Invalid tool_choice directive: {raw!r}")


def _decode_mode(raw: str) -> ChoiceMode:
    try:
        return ChoiceMode(raw)
    except ValueError:
        raise MalformedResponseError(f"Unknown directive: {raw!r}") from None


# --- Functions, tools, calls ---


def encode_function(fn: FunctionDefinition) -> dict[str, Any]:
    return _compact(
        {"name": fn.name, "description": fn.description, "parameters": fn.parameters}
    )


def encode_tool(t: Tool) -> dict[str, Any]:
    return {"type": t.type, "function": encode_function(t.function)}


def _encode_function_call_value(call: FunctionCall) -> dict[str, Any]:
    return {"name": call.name, "arguments": call.arguments}


def _encode_tool_call(call: ToolCall) -> dict[str, Any]:
    return {
        "id": call.id,
        "type": call.type,
        "function": _encode_function_call_value(call.function),
    }


def _decode_function_call_value(raw: dict[str, Any]) -> FunctionCall:
    return FunctionCall(name=raw["name"], arguments=raw.get("arguments", "{}"))


def _decode_tool_call(raw: dict[str, Any]) -> ToolCall:
    return ToolCall(
        id=raw["id"],
        function=_decode_function_call_value(raw["function"]),
        type=raw.get("type", "function"),
    )


# --- Messages ---


def _encode_part(part: ContentPart) -> dict[str, Any]:
    match part:
        case TextPart(text=text):
            return {"type": "text", "text": text}
        case ImagePart(url=url, detail=detail):
            return {
                "type": "image_url",
                "image_url": _compact({"url": url, "detail": detail}),
            }
        case _:
            assert_never(part)


def encode_message(message: Message) -> dict[str, Any]:
    """Encode one message in its role-specific wire shape."""
    match message:
        case SystemMessage(content=content, name=name):
            return _compact({"role": message.role, "content": content, "name": name})
        case UserMessage(content=content, name=name):
            wire_content: str | list[dict[str, Any]] = (
                content
                if isinstance(content, str)
                else [_encode_part(p) for p in content]
            )
            return _compact(
                {"role": message.role, "content": wire_content, "name": name}
            )
        case AssistantMessage():
            return _compact(
                {
                    "role": message.role,
                    "content": message.content,
                    "name": message.name,
                    "tool_calls": (
                        [_encode_tool_call(c) for c in message.tool_calls]
                        if message.tool_calls is not None
                        else None
                    ),
                    "function_call": (
                        _encode_function_call_value(message.function_call)
                        if message.function_call is not None
                        else None
                    ),
                }
            )
        case ToolMessage(content=content, tool_call_id=tool_call_id):
            return {
                "role": message.role,
                "content": content,
                "tool_call_id": tool_call_id,
            }
        case FunctionMessage(content=content, name=name):
            return {"role": message.role, "content": content, "name": name}
        case _:
            assert_never(message)


def _decode_part(raw: dict[str, Any]) -> ContentPart:
    match raw.get("type"):
        case "text":
            return TextPart(raw["text"])
        case "image_url":
            image = raw["image_url"]
            return ImagePart(url=image["url"], detail=image.get("detail"))
        case other:
            raise MalformedResponseError(f"Unknown content part type: {other!r}")


def decode_message(raw: dict[str, Any]) -> Message:
    """Decode a wire-shaped message back into its request variant."""
    try:
        match raw.get("role"):
            case "system":
                return SystemMessage(raw["content"], raw.get("name"))
            case "user":
                content = raw["content"]
                if not isinstance(content, str):
                    content = tuple(_decode_part(p) for p in content)
                return UserMessage(content, raw.get("name"))
            case "assistant":
                tool_calls = raw.get("tool_calls")
                function_call = raw.get("function_call")
                return AssistantMessage(
                    content=raw.get("content"),
                    name=raw.get("name"),
                    tool_calls=(
                        tuple(_decode_tool_call(c) for c in tool_calls)
                        if tool_calls is not None
                        else None
                    ),
                    function_call=(
                        _decode_function_call_value(function_call)
                        if function_call is not None
                        else None
                    ),
                )
            case "tool":
                return ToolMessage(raw["content"], raw["tool_call_id"])
            case "function":
                return FunctionMessage(raw["content"], raw["name"])
            case other:
                raise MalformedResponseError(f"Unknown message role: {other!r}")
    except (KeyError, TypeError, ConfigurationError) as e:
        raise MalformedResponseError(f"Malformed message: {raw!r}") from e


# --- Request ---


def encode_chat_request(request: ChatCompletionRequest) -> dict[str, Any]:
    """Encode a chat request as the JSON body of ``chat/completions``."""
    return _compact(
        {
            "messages": [encode_message(m) for m in request.messages],
            "model": model_id(request.model),
            "frequency_penalty": request.frequency_penalty,
            "function_call": (
                encode_function_call(request.function_call)
                if request.function_call is not None
                else None
            ),
            "functions": (
                [encode_function(f) for f in request.functions]
                if request.functions is not None
                else None
            ),
            "max_tokens": request.max_tokens,
            "n": request.n,
            "parallel_tool_calls": request.parallel_tool_calls,
            "presence_penalty": request.presence_penalty,
            "response_format": (
                {"type": request.response_format.value}
                if request.response_format is not None
                else None
            ),
            "seed": request.seed,
            "stop": list(request.stop) if request.stop is not None else None,
            "stream": request.stream,
            "stream_options": (
                _compact({"include_usage": request.stream_options.include_usage})
                if request.stream_options is not None
                else None
            ),
            "temperature": request.temperature,
            "tool_choice": (
                encode_tool_choice(request.tool_choice)
                if request.tool_choice is not None
                else None
            ),
            "tools": (
                [encode_tool(t) for t in request.tools]
                if request.tools is not None
                else None
            ),
            "top_p": request.top_p,
            "user": request.user,
        }
    )
