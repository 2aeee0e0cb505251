"""Provider-specific implementations of the LLMProvider interface."""

from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "AnthropicProvider",
]
