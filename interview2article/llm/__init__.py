"""LLM provider abstraction layer.

Vendor-neutral access to OpenAI and Anthropic with retry and fallback.
"""

from .client import LLMClient, get_client
from .errors import (
    AuthenticationError,
    ContentFilterError,
    InvalidRequestError,
    LLMError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
    TimeoutError,
)
from .models import ChatMessage, LLMRequest, LLMResponse, ResponseFormat, Usage

__all__ = [
    "LLMClient",
    "get_client",
    "LLMRequest",
    "LLMResponse",
    "ChatMessage",
    "ResponseFormat",
    "Usage",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "TimeoutError",
    "InvalidRequestError",
    "ContentFilterError",
    "ModelNotFoundError",
    "ProviderError",
]
