"""LLM error hierarchy.

Every provider failure is translated into one of these classes so that
callers can decide between retrying, falling back to another provider,
falling back to local quote matching, or asking the user to retry.
"""


class LLMError(Exception):
    """Base exception for LLM operations."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        request_id: str | None = None,
        correlation_id: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.request_id = request_id
        self.correlation_id = correlation_id

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.provider:
            parts.append(f"provider={self.provider}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " ".join(parts)


class AuthenticationError(LLMError):
    """401/403 or missing API key. Not retried."""


class RateLimitError(LLMError):
    """429 from the provider. Retried, honouring retry_after when present."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        provider: str | None = None,
        request_id: str | None = None,
        correlation_id: str | None = None,
    ):
        super().__init__(message, provider, request_id, correlation_id)
        self.retry_after = retry_after


class TimeoutError(LLMError):
    """The provider did not answer within the configured timeout. Retried."""


class InvalidRequestError(LLMError):
    """400 - the request itself is wrong (bad model params, prompt too long)."""


class ContentFilterError(LLMError):
    """The provider's safety system refused the prompt or the completion."""


class ProviderError(LLMError):
    """5xx or connection failure on the provider side. Retried."""


class ModelNotFoundError(LLMError):
    """404 - the configured model name does not exist for this provider."""


RETRYABLE_ERRORS = (RateLimitError, TimeoutError, ProviderError)
NON_RETRYABLE_ERRORS = (AuthenticationError, InvalidRequestError, ContentFilterError, ModelNotFoundError)
