"""Audio request validation and multipart field encoding."""

from __future__ import annotations

from pathlib import Path

import pytest

from groqkit.api.audio import (
    AudioResponseFormat,
    TimestampGranularity,
    TranscriptionRequest,
    TranslationRequest,
    encode_transcription_form,
    encode_translation_form,
)
from groqkit.errors import ConfigurationError
from groqkit.models import GroqModel, model_id

pytestmark = pytest.mark.unit


def test_transcription_requires_exactly_one_source() -> None:
    with pytest.raises(ConfigurationError, match="exactly one"):
        TranscriptionRequest(model=GroqModel.WHISPER_LARGE_V3)
    with pytest.raises(ConfigurationError, match="exactly one"):
        TranscriptionRequest(
            model=GroqModel.WHISPER_LARGE_V3, file=b"a", url="https://x/a.mp3"
        )


def test_transcription_form_fields_in_order() -> None:
    request = TranscriptionRequest(
        model=GroqModel.WHISPER_LARGE_V3,
        file=b"audio-bytes",
        filename="talk.wav",
        language="de",
        prompt="A lecture",
        response_format=AudioResponseFormat.JSON,
        temperature=0.2,
        timestamp_granularities=[TimestampGranularity.SEGMENT],
    )

    assert encode_transcription_form(request) == [
        ("model", (None, "whisper-large-v3")),
        ("file", ("talk.wav", b"audio-bytes")),
        ("language", (None, "de")),
        ("prompt", (None, "A lecture")),
        ("response_format", (None, "json")),
        ("temperature", (None, "0.2")),
        ("timestamp_granularities[]", (None, "segment")),
    ]


def test_url_transcription_form_has_no_file_field() -> None:
    request = TranscriptionRequest(model="whisper-large-v3", url="https://x/a.mp3")

    assert encode_transcription_form(request) == [
        ("model", (None, "whisper-large-v3")),
        ("url", (None, "https://x/a.mp3")),
    ]


def test_translation_form_defaults_filename() -> None:
    request = TranslationRequest(model=GroqModel.WHISPER_LARGE_V3, file=b"x")

    assert encode_translation_form(request) == [
        ("model", (None, "whisper-large-v3")),
        ("file", ("audio.mp3", b"x")),
    ]


def test_translation_requires_bytes() -> None:
    with pytest.raises(ConfigurationError, match="bytes"):
        TranslationRequest(
            model=GroqModel.WHISPER_LARGE_V3,
            file="path.mp3",  # type: ignore[arg-type]
        )


def test_from_file_uses_path_name(tmp_path: Path) -> None:
    path = tmp_path / "meeting.m4a"
    path.write_bytes(b"m4a-bytes")

    transcription = TranscriptionRequest.from_file(
        path, model=GroqModel.WHISPER_LARGE_V3, language="en"
    )
    translation = TranslationRequest.from_file(path, model=GroqModel.WHISPER_LARGE_V3)

    assert transcription.file == b"m4a-bytes"
    assert transcription.filename == "meeting.m4a"
    assert transcription.language == "en"
    assert translation.filename == "meeting.m4a"


def test_from_missing_file_fails_clearly(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found") as exc:
        TranscriptionRequest.from_file(tmp_path / "nope.mp3", model="whisper-large-v3")
    assert exc.value.hint is not None


def test_model_id_accepts_catalog_members_and_raw_strings() -> None:
    assert model_id(GroqModel.WHISPER_LARGE_V3_TURBO) == "whisper-large-v3-turbo"
    assert model_id("some-new-model") == "some-new-model"
