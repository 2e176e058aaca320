from app.ai.config import load_ai_config
from app.ai.errors import ConfigurationError
from app.ai.gateway import ServiceGateway
from app.ai.policy import retry_policy_from_settings
from app.ai.types import AIClient
from app.core.config import settings

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.providers.gemini_provider import GeminiProvider


def get_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is not defined")
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout_s=settings.ai_timeout_s,
        )

    if cfg.provider == "gemini":
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not defined")
        return GeminiProvider(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout_s=settings.ai_timeout_s,
        )

    raise ConfigurationError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def get_service_gateway() -> ServiceGateway:
    cfg = load_ai_config()
    return ServiceGateway(
        get_ai_client(),
        model=cfg.model,
        fallback_model=cfg.fallback_model,
        policy=retry_policy_from_settings(),
    )
