from __future__ import annotations

import asyncio
import logging

from app.ai.errors import ServiceError, ServiceErrorKind, classify_error
from app.ai.policy import RetryPolicy
from app.ai.types import AIClient, Sleeper

logger = logging.getLogger(__name__)


class ServiceGateway:
    """Sends one instruction at a time to the text-generation service.

    Rate-limited calls are retried with exponential backoff up to
    ``policy.max_attempts`` calls in total. A model-unavailable answer from the
    primary model switches once to ``fallback_model``; whatever that call
    yields is final. Every other error propagates immediately.
    """

    def __init__(
        self,
        client: AIClient,
        *,
        model: str,
        fallback_model: str,
        policy: RetryPolicy | None = None,
        sleep: Sleeper | None = None,
    ):
        self._client = client
        self.model = model
        self.fallback_model = fallback_model
        self.policy = policy or RetryPolicy()
        self._sleep = sleep or asyncio.sleep

    async def _attempt(self, model: str, instruction: str) -> str:
        try:
            return await self._client.generate(model, instruction)
        except ServiceError:
            raise
        except Exception as exc:  # noqa: BLE001 - classified at the boundary
            raise classify_error(exc, model=model) from exc

    async def call(self, instruction: str) -> str:
        attempt = 1
        while True:
            try:
                text = await self._attempt(self.model, instruction)
                logger.debug("service_gateway_ok model=%s attempt=%s chars=%s", self.model, attempt, len(text))
                return text
            except ServiceError as exc:
                if exc.kind is ServiceErrorKind.RATE_LIMITED:
                    if attempt >= self.policy.max_attempts:
                        logger.warning(
                            "service_gateway_rate_limit_exhausted model=%s attempts=%s", self.model, attempt
                        )
                        raise
                    delay = self.policy.delay_for(attempt)
                    logger.info(
                        "service_gateway_rate_limited model=%s attempt=%s delay_s=%s", self.model, attempt, delay
                    )
                    await self._sleep(delay)
                    attempt += 1
                    continue

                if exc.kind is ServiceErrorKind.MODEL_UNAVAILABLE:
                    logger.warning(
                        "service_gateway_model_unavailable model=%s fallback=%s", self.model, self.fallback_model
                    )
                    return await self._attempt(self.fallback_model, instruction)

                logger.warning("service_gateway_failed model=%s kind=%s: %s", self.model, exc.kind.value, exc)
                raise
