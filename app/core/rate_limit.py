from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings


def _client_key(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for", "").strip()
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(key_func=_client_key, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Per-client limit for the analysis endpoints; each run costs three model calls."""
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit)

    def decorator(func):
        return func

    return decorator
