from __future__ import annotations

from dataclasses import dataclass

from app.core.config import settings


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for rate-limited calls.

    ``max_attempts`` counts every call, the first one included.
    """

    max_attempts: int = 3
    base_delay_s: float = 2.0
    multiplier: float = 2.0

    def delay_for(self, attempt: int) -> float:
        return self.base_delay_s * (self.multiplier ** max(0, attempt - 1))

    def delays(self) -> list[float]:
        return [self.delay_for(attempt) for attempt in range(1, self.max_attempts)]


def retry_policy_from_settings() -> RetryPolicy:
    return RetryPolicy(
        max_attempts=settings.analysis_max_attempts,
        base_delay_s=settings.analysis_backoff_base_s,
        multiplier=settings.analysis_backoff_multiplier,
    )
