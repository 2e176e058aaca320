from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    ai_provider: str
    gemini_api_key: str | None
    gemini_base_url: str
    gemini_model: str
    gemini_fallback_model: str
    ai_timeout_s: float
    openai_api_key: str | None
    openai_base_url: str | None
    openai_model: str
    openai_fallback_model: str
    analysis_max_attempts: int
    analysis_backoff_base_s: float
    analysis_backoff_multiplier: float
    analysis_pacing_delay_s: float
    max_document_chars: int
    report_store_db_path: str
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]


settings = Settings(
    ai_provider=(_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower(),
    gemini_api_key=_get_env("GEMINI_API_KEY"),
    gemini_base_url=_get_env(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    or "https://generativelanguage.googleapis.com/v1beta/openai/",
    gemini_model=_get_env("GEMINI_MODEL", "gemini-2.0-flash") or "gemini-2.0-flash",
    gemini_fallback_model=_get_env("GEMINI_FALLBACK_MODEL", "gemini-2.0-flash-lite") or "gemini-2.0-flash-lite",
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    openai_model=_get_env("OPENAI_MODEL", "gpt-4o-mini") or "gpt-4o-mini",
    openai_fallback_model=_get_env("OPENAI_FALLBACK_MODEL", "gpt-4.1-nano") or "gpt-4.1-nano",
    analysis_max_attempts=max(1, _get_env_int("ANALYSIS_MAX_ATTEMPTS", 3)),
    analysis_backoff_base_s=_get_env_float("ANALYSIS_BACKOFF_BASE_S", 2.0),
    analysis_backoff_multiplier=_get_env_float("ANALYSIS_BACKOFF_MULTIPLIER", 2.0),
    analysis_pacing_delay_s=_get_env_float("ANALYSIS_PACING_DELAY_S", 1.0),
    max_document_chars=_get_env_int("MAX_DOCUMENT_CHARS", 120000),
    report_store_db_path=_get_env("REPORT_STORE_DB_PATH", "data/report_store.db") or "data/report_store.db",
    rate_limit=_get_env("RATE_LIMIT", "10/minute") or "10/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
)

if settings.ai_provider not in {"gemini", "openai"}:
    raise RuntimeError("AI_PROVIDER must be either 'gemini' or 'openai'.")
