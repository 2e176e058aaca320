from __future__ import annotations

import os
from typing import Optional

from app.ai.errors import ConfigurationError
from app.ai.providers.openai_provider import OpenAIProvider

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiProvider(OpenAIProvider):
    """Gemini through Google AI Studio's OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        temperature: float = 0.3,
    ):
        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key:
            raise ConfigurationError("GEMINI_API_KEY is missing")
        super().__init__(
            api_key=key,
            base_url=base_url or GEMINI_OPENAI_BASE_URL,
            timeout_s=timeout_s,
            temperature=temperature,
        )
