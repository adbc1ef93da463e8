"""groqkit: a typed async client for the Groq chat, audio and models API.

Public API:
    - GroqClient: endpoint methods returning Success/Failure results
    - Config: client configuration (API key, base URL, timeout, retry)
    - ChatCompletionRequest and message constructors
    - TranscriptionRequest / TranslationRequest
"""

from __future__ import annotations

import logging

from groqkit.api.audio import (
    AudioResponseFormat,
    TimestampGranularity,
    TranscriptionRequest,
    TranslationRequest,
)
from groqkit.api.chat import (
    ChatCompletionRequest,
    ChoiceMode,
    FunctionDefinition,
    ImagePart,
    NamedFunctionCall,
    NamedToolChoice,
    ResponseFormat,
    StreamOptions,
    TextPart,
    Tool,
    assistant,
    function,
    image,
    system,
    text,
    tool,
    user,
)
from groqkit.client import GroqClient
from groqkit.config import Config
from groqkit.envelope import GroqResponse
from groqkit.errors import (
    APIError,
    ConfigurationError,
    GroqkitError,
    MalformedResponseError,
    RateLimitError,
    VendorError,
)
from groqkit.models import GroqModel
from groqkit.ratelimit import NEVER_RESETS, RateLimit
from groqkit.result import Failure, Result, Success
from groqkit.retry import RetryPolicy
from groqkit.streaming import StreamingResponse

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("groqkit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("groqkit").addHandler(logging.NullHandler())

__all__ = [
    "NEVER_RESETS",
    "APIError",
    "AudioResponseFormat",
    "ChatCompletionRequest",
    "ChoiceMode",
    "Config",
    "ConfigurationError",
    "Failure",
    "FunctionDefinition",
    "GroqClient",
    "GroqModel",
    "GroqResponse",
    "GroqkitError",
    "ImagePart",
    "MalformedResponseError",
    "NamedFunctionCall",
    "NamedToolChoice",
    "RateLimit",
    "RateLimitError",
    "ResponseFormat",
    "Result",
    "RetryPolicy",
    "StreamOptions",
    "StreamingResponse",
    "Success",
    "TextPart",
    "TimestampGranularity",
    "Tool",
    "TranscriptionRequest",
    "TranslationRequest",
    "VendorError",
    "assistant",
    "function",
    "image",
    "system",
    "text",
    "tool",
    "user",
]
