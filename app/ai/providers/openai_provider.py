from __future__ import annotations

import os
from typing import Optional

from openai import AsyncOpenAI

from app.ai.errors import ConfigurationError, ServiceError, classify_error


class OpenAIProvider:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        temperature: float = 0.3,
    ):
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise ConfigurationError("OPENAI_API_KEY is missing")

        # Retries belong to the gateway; the SDK must not retry on its own.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s,
            max_retries=0,
        )

    async def generate(self, model: str, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except Exception as exc:
            raise classify_error(exc, model=model) from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise ServiceError("Empty response from model", model=model)
        return str(content)
