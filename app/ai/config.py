from dataclasses import dataclass

from app.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    fallback_model: str


def load_ai_config() -> AIConfig:
    if settings.ai_provider == "openai":
        return AIConfig(
            provider="openai",
            model=settings.openai_model,
            fallback_model=settings.openai_fallback_model,
        )
    return AIConfig(
        provider="gemini",
        model=settings.gemini_model,
        fallback_model=settings.gemini_fallback_model,
    )
