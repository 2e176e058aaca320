from __future__ import annotations

from enum import Enum

import openai


class ConfigurationError(RuntimeError):
    pass


class ServiceErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    MODEL_UNAVAILABLE = "model_unavailable"
    OTHER = "other"


class ServiceError(RuntimeError):
    def __init__(self, message: str, *, kind: ServiceErrorKind = ServiceErrorKind.OTHER, model: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.model = model


def classify_error(exc: Exception, *, model: str | None = None) -> ServiceError:
    """Map a transport exception onto the gateway's error kinds."""
    if isinstance(exc, ServiceError):
        return exc

    kind = ServiceErrorKind.OTHER
    if isinstance(exc, openai.RateLimitError):
        kind = ServiceErrorKind.RATE_LIMITED
    elif isinstance(exc, openai.NotFoundError):
        kind = ServiceErrorKind.MODEL_UNAVAILABLE
    elif isinstance(exc, openai.APIStatusError):
        if exc.status_code == 429:
            kind = ServiceErrorKind.RATE_LIMITED
        elif exc.status_code == 404:
            kind = ServiceErrorKind.MODEL_UNAVAILABLE

    return ServiceError(str(exc) or exc.__class__.__name__, kind=kind, model=model)
