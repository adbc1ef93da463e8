"""Small HTTP-related constants shared across groqkit.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

BASE_URL = "https://api.groq.com/openai/v1/"
USER_AGENT = "groqkit-python"

CHAT_COMPLETIONS_ENDPOINT = "chat/completions"
TRANSCRIPTIONS_ENDPOINT = "audio/transcriptions"
TRANSLATIONS_ENDPOINT = "audio/translations"
MODELS_ENDPOINT = "models"

# Rate-limit headers, all optional on any given response.
LIMIT_REQUESTS_HEADER = "x-ratelimit-limit-requests"
LIMIT_TOKENS_HEADER = "x-ratelimit-limit-tokens"
REMAINING_REQUESTS_HEADER = "x-ratelimit-remaining-requests"
REMAINING_TOKENS_HEADER = "x-ratelimit-remaining-tokens"
RESET_REQUESTS_HEADER = "x-ratelimit-reset-requests"
RESET_TOKENS_HEADER = "x-ratelimit-reset-tokens"
RETRY_AFTER_HEADER = "retry-after"


def model_endpoint(model_id: str) -> str:
    """Return the path of a single model resource."""
    return f"{MODELS_ENDPOINT}/{model_id}"
