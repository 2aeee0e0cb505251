"""LLM client with retry and provider fallback.

Used by the text generation collaborator (key points, drafts) and by
the optional AI quote verifier.
"""

import asyncio
import logging
import os
import random
import uuid

from .errors import NON_RETRYABLE_ERRORS, RETRYABLE_ERRORS, LLMError, RateLimitError
from .models import LLMRequest, LLMResponse
from .providers.anthropic import AnthropicProvider
from .providers.base import LLMProvider
from .providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)

# Provider name -> API key environment variable
PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


class LLMClient:
    """LLM client with retry and fallback.

    - Exponential backoff with jitter for retryable errors
    - Fallback to the next configured provider (OpenAI -> Anthropic)
    - One correlation ID shared by all attempts of a call

    Configuration (env vars):
    - LLM_DEFAULT_PROVIDER: Primary provider (default: "openai")
    - LLM_TIMEOUT_SECONDS: Request timeout (default: 60)
    - LLM_MAX_RETRIES: Retries per provider (default: 2)
    """

    DEFAULT_PROVIDER = "openai"
    DEFAULT_TIMEOUT = 60.0
    DEFAULT_MAX_RETRIES = 2
    DEFAULT_BASE_DELAY = 1.0
    DEFAULT_MAX_DELAY = 30.0

    def __init__(
        self,
        default_provider: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        openai_api_key: str | None = None,
        anthropic_api_key: str | None = None,
    ):
        self._default_provider = default_provider or os.environ.get(
            "LLM_DEFAULT_PROVIDER", self.DEFAULT_PROVIDER
        )
        self._timeout = (
            timeout
            if timeout is not None
            else float(os.environ.get("LLM_TIMEOUT_SECONDS", self.DEFAULT_TIMEOUT))
        )
        self._max_retries = (
            max_retries
            if max_retries is not None
            else int(os.environ.get("LLM_MAX_RETRIES", self.DEFAULT_MAX_RETRIES))
        )
        self._api_keys = {
            "openai": openai_api_key,
            "anthropic": anthropic_api_key,
        }
        self._providers: dict[str, LLMProvider] = {
            "openai": OpenAIProvider(api_key=openai_api_key, timeout=self._timeout),
            "anthropic": AnthropicProvider(api_key=anthropic_api_key, timeout=self._timeout),
        }

    def get_provider(self, name: str) -> LLMProvider:
        """Get a provider by name.

        Raises:
            ValueError: If the provider name is not recognized.
        """
        if name not in self._providers:
            raise ValueError(f"Unknown provider: {name}. Available: {list(self._providers)}")
        return self._providers[name]

    def is_provider_available(self, name: str) -> bool:
        """True when the provider exists and has an API key."""
        if name not in self._providers:
            return False
        return bool(self._api_keys.get(name) or os.environ.get(PROVIDER_KEY_ENV[name]))

    def has_available_provider(self) -> bool:
        return any(self.is_provider_available(name) for name in self._providers)

    def provider_order(self, provider: str | None = None) -> list[str]:
        """Providers to try, primary first."""
        primary = provider or self._default_provider
        order = [primary] if primary in self._providers else []
        order.extend(name for name in self._providers if name not in order)
        return order

    async def generate(
        self,
        request: LLMRequest,
        provider: str | None = None,
        fallback: bool = True,
        correlation_id: str | None = None,
    ) -> LLMResponse:
        """Generate a completion with retry and fallback.

        Raises:
            LLMError: If every available provider fails, or none is configured.
        """
        correlation_id = correlation_id or str(uuid.uuid4())
        candidates = self.provider_order(provider)
        if not fallback:
            candidates = candidates[:1]

        last_error: LLMError | None = None

        for provider_name in candidates:
            if not self.is_provider_available(provider_name):
                logger.debug(
                    "Provider %s not configured, skipping",
                    provider_name,
                    extra={"correlation_id": correlation_id},
                )
                continue

            try:
                return await self._generate_with_retry(request, provider_name, correlation_id)
            except RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(
                    "Provider %s exhausted retries: %s",
                    provider_name,
                    e,
                    extra={
                        "correlation_id": correlation_id,
                        "provider": provider_name,
                        "error_type": type(e).__name__,
                    },
                )
            except NON_RETRYABLE_ERRORS as e:
                logger.error(
                    "Provider %s failed with non-retryable error: %s",
                    provider_name,
                    e,
                    extra={
                        "correlation_id": correlation_id,
                        "provider": provider_name,
                        "error_type": type(e).__name__,
                    },
                )
                raise

        if last_error:
            raise last_error

        raise LLMError("No LLM provider configured", correlation_id=correlation_id)

    async def _generate_with_retry(
        self,
        request: LLMRequest,
        provider_name: str,
        correlation_id: str,
    ) -> LLMResponse:
        provider = self.get_provider(provider_name)
        attempts = self._max_retries + 1

        for attempt in range(attempts):
            try:
                response = await provider.generate(request)
            except RETRYABLE_ERRORS as e:
                e.correlation_id = correlation_id
                logger.warning(
                    "Retryable error on attempt %d/%d: %s",
                    attempt + 1,
                    attempts,
                    e,
                    extra={
                        "correlation_id": correlation_id,
                        "provider": provider_name,
                        "attempt": attempt + 1,
                    },
                )
                if attempt + 1 == attempts:
                    raise
                await asyncio.sleep(self._calculate_backoff(attempt, e))
                continue

            logger.info(
                "LLM request succeeded",
                extra={
                    "correlation_id": correlation_id,
                    "provider": response.provider,
                    "model": response.model,
                    "latency_ms": response.latency_ms,
                    "finish_reason": response.finish_reason,
                },
            )
            return response

        raise LLMError(
            f"Provider {provider_name} made no attempts",
            provider=provider_name,
            correlation_id=correlation_id,
        )

    def _calculate_backoff(self, attempt: int, error: Exception) -> float:
        """Exponential backoff with +/-25% jitter, capped at DEFAULT_MAX_DELAY."""
        if isinstance(error, RateLimitError) and error.retry_after:
            return min(error.retry_after, self.DEFAULT_MAX_DELAY)

        base_delay = self.DEFAULT_BASE_DELAY * (2 ** attempt)
        jitter = base_delay * 0.25 * (2 * random.random() - 1)
        return min(base_delay + jitter, self.DEFAULT_MAX_DELAY)


_default_client: LLMClient | None = None


def get_client() -> LLMClient:
    """Get the default LLM client singleton."""
    global _default_client
    if _default_client is None:
        _default_client = LLMClient()
    return _default_client
