"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any

from ..errors import (
    AuthenticationError,
    ContentFilterError,
    InvalidRequestError,
    LLMError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
)
from ..models import LLMRequest, LLMResponse

# Phrases providers use when a 400 is really a safety refusal
CONTENT_FILTER_MARKERS = ("content_filter", "safety", "harmful")


class LLMProvider(ABC):
    """Interface every provider implements.

    Providers translate vendor exceptions into the shared
    ``LLMError`` hierarchy so the client can apply one retry policy.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier: 'openai', 'anthropic'."""
        ...

    @abstractmethod
    async def generate(self, request: LLMRequest) -> LLMResponse:
        """Send a completion request and return the response.

        Raises:
            AuthenticationError: Invalid or missing API key.
            RateLimitError: Rate limit exceeded (retryable).
            TimeoutError: Request timed out (retryable).
            InvalidRequestError: Malformed request (non-retryable).
            ContentFilterError: Response blocked by safety filters.
            ProviderError: Provider-side failure (retryable).
        """
        ...

    def raise_for_status(self, error: Any) -> None:
        """Convert a vendor ``APIStatusError`` into an ``LLMError``.

        Both vendor SDKs expose ``status_code``, ``message``, ``request_id``
        and the raw ``response`` on their status errors.
        """
        status_code = error.status_code
        message = str(getattr(error, "message", error))
        request_id = getattr(error, "request_id", None)
        label = self.name.capitalize() if self.name != "openai" else "OpenAI"

        if status_code in (401, 403):
            raise AuthenticationError(
                f"{label} authentication failed ({status_code}): {message}",
                provider=self.name,
                request_id=request_id,
            ) from error

        if status_code == 404:
            raise ModelNotFoundError(
                f"Model not found: {message}",
                provider=self.name,
                request_id=request_id,
            ) from error

        if status_code == 429:
            raise RateLimitError(
                f"{label} rate limit exceeded: {message}",
                retry_after=_retry_after(error),
                provider=self.name,
                request_id=request_id,
            ) from error

        if status_code == 400:
            if any(marker in message.lower() for marker in CONTENT_FILTER_MARKERS):
                raise ContentFilterError(
                    f"Content blocked by {label} safety filters: {message}",
                    provider=self.name,
                    request_id=request_id,
                ) from error
            raise InvalidRequestError(
                f"Invalid request to {label}: {message}",
                provider=self.name,
                request_id=request_id,
            ) from error

        if status_code >= 500:
            raise ProviderError(
                f"{label} server error ({status_code}): {message}",
                provider=self.name,
                request_id=request_id,
            ) from error

        raise LLMError(
            f"{label} error ({status_code}): {message}",
            provider=self.name,
            request_id=request_id,
        ) from error


def _retry_after(error: Any) -> float | None:
    """Read the retry-after header from a 429 response, if any."""
    response = getattr(error, "response", None)
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None
