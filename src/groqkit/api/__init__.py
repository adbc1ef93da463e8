"""Request and response types for each endpoint."""

from .audio import (
    AudioResponseFormat,
    TimestampGranularity,
    TranscriptionRequest,
    TranslationRequest,
)
from .chat import (
    AssistantMessage,
    ChatCompletionRequest,
    ChoiceMode,
    FunctionCall,
    FunctionDefinition,
    FunctionMessage,
    ImagePart,
    Message,
    NamedFunctionCall,
    NamedToolChoice,
    ResponseFormat,
    StreamOptions,
    SystemMessage,
    TextPart,
    Tool,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from .responses import (
    AudioTranscription,
    AudioTranslation,
    ChatCompletion,
    Model,
    StreamingChatCompletion,
    Usage,
    XGroq,
)

__all__ = [
    "AssistantMessage",
    "AudioResponseFormat",
    "AudioTranscription",
    "AudioTranslation",
    "ChatCompletion",
    "ChatCompletionRequest",
    "ChoiceMode",
    "FunctionCall",
    "FunctionDefinition",
    "FunctionMessage",
    "ImagePart",
    "Message",
    "Model",
    "NamedFunctionCall",
    "NamedToolChoice",
    "ResponseFormat",
    "StreamOptions",
    "StreamingChatCompletion",
    "SystemMessage",
    "TextPart",
    "TimestampGranularity",
    "Tool",
    "ToolCall",
    "ToolMessage",
    "TranscriptionRequest",
    "TranslationRequest",
    "Usage",
    "UserMessage",
    "XGroq",
]
