"""Audio transcription and translation requests.

Both endpoints take ``multipart/form-data``; ``encode_*_form`` flatten a
request into the multipart field list passed to ``httpx`` as ``files=``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from groqkit.errors import ConfigurationError
from groqkit.models import ModelId, model_id

DEFAULT_FILENAME = "audio.mp3"


class AudioResponseFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    VERBOSE_JSON = "verbose_json"


class TimestampGranularity(StrEnum):
    WORD = "word"
    SEGMENT = "segment"


def _read_audio(path: str | Path) -> tuple[bytes, str]:
    p = Path(path)
    if not p.is_file():
        raise ConfigurationError(
            f"Audio file not found: {p}",
            hint="Pass an existing file path, or raw bytes via file=...",
        )
    return p.read_bytes(), p.name


@dataclass(frozen=True)
class TranscriptionRequest:
    """Transcribe audio given either as inline bytes or as a remote URL."""

    model: ModelId
    file: bytes | None = None
    url: str | None = None
    filename: str = DEFAULT_FILENAME
    language: str | None = None
    prompt: str | None = None
    response_format: AudioResponseFormat | None = None
    temperature: float | None = None
    timestamp_granularities: tuple[TimestampGranularity, ...] | None = None

    def __post_init__(self) -> None:
        """Require exactly one audio source."""
        if not self.model:
            raise ConfigurationError("model must be set")
        if (self.file is None) == (self.url is None):
            raise ConfigurationError(
                "exactly one of file or url must be set",
                hint="Use TranscriptionRequest.from_file(...) or pass url=...",
            )
        if self.timestamp_granularities is not None:
            object.__setattr__(
                self, "timestamp_granularities", tuple(self.timestamp_granularities)
            )

    @classmethod
    def from_file(
        cls, path: str | Path, *, model: ModelId, **kwargs: Any
    ) -> TranscriptionRequest:
        """Load audio from a local file; the filename is taken from the path."""
        data, name = _read_audio(path)
        return cls(model=model, file=data, filename=name, **kwargs)


@dataclass(frozen=True)
class TranslationRequest:
    """Translate audio into English text."""

    model: ModelId
    file: bytes
    filename: str = DEFAULT_FILENAME
    prompt: str | None = None
    response_format: AudioResponseFormat | None = None
    temperature: float | None = None

    def __post_init__(self) -> None:
        if not self.model:
            raise ConfigurationError("model must be set")
        if not isinstance(self.file, bytes | bytearray):
            raise ConfigurationError(
                "file must be bytes",
                hint="Use TranslationRequest.from_file(...) to load from disk.",
            )

    @classmethod
    def from_file(
        cls, path: str | Path, *, model: ModelId, **kwargs: Any
    ) -> TranslationRequest:
        data, name = _read_audio(path)
        return cls(model=model, file=data, filename=name, **kwargs)


# Sent as ``files=`` so the body is always multipart, even for URL-only requests.
MultipartFields = list[tuple[str, tuple[str | None, str | bytes]]]


def encode_transcription_form(request: TranscriptionRequest) -> MultipartFields:
    fields: MultipartFields = [_field("model", model_id(request.model))]
    if request.file is not None:
        fields.append(("file", (request.filename, bytes(request.file))))
    if request.url is not None:
        fields.append(_field("url", request.url))
    if request.language is not None:
        fields.append(_field("language", request.language))
    fields.extend(
        _common_fields(request.prompt, request.response_format, request.temperature)
    )
    for granularity in request.timestamp_granularities or ():
        fields.append(_field("timestamp_granularities[]", granularity.value))
    return fields


def encode_translation_form(request: TranslationRequest) -> MultipartFields:
    fields: MultipartFields = [
        _field("model", model_id(request.model)),
        ("file", (request.filename, bytes(request.file))),
    ]
    fields.extend(
        _common_fields(request.prompt, request.response_format, request.temperature)
    )
    return fields


def _field(name: str, value: str) -> tuple[str, tuple[str | None, str]]:
    return name, (None, value)


def _common_fields(
    prompt: str | None,
    response_format: AudioResponseFormat | None,
    temperature: float | None,
) -> MultipartFields:
    fields: MultipartFields = []
    if prompt is not None:
        fields.append(_field("prompt", prompt))
    if response_format is not None:
        fields.append(_field("response_format", response_format.value))
    if temperature is not None:
        fields.append(_field("temperature", str(temperature)))
    return fields
