"""Anthropic provider (Messages API).

Anthropic has no JSON mode; ``json_object`` requests get an extra
system instruction and callers strip code fences before parsing.
"""

import os
import time
from typing import Any

from anthropic import APIConnectionError, APIStatusError, APITimeoutError, AsyncAnthropic

from ..errors import AuthenticationError, ProviderError, TimeoutError
from ..models import LLMRequest, LLMResponse, Usage
from .base import LLMProvider

JSON_ONLY_INSTRUCTION = "Respond with a single JSON object and nothing else."

# Anthropic stop reasons -> normalised finish reasons
FINISH_REASONS = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
}


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API provider."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 60.0,
        default_model: str = "claude-sonnet-4-5-20250929",
    ):
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._timeout = timeout
        self._default_model = default_model
        self._client: AsyncAnthropic | None = None

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def client(self) -> AsyncAnthropic:
        """Lazy-initialized Anthropic client."""
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "Anthropic API key not configured. Set ANTHROPIC_API_KEY environment variable.",
                    provider=self.name,
                )
            self._client = AsyncAnthropic(api_key=self._api_key, timeout=self._timeout)
        return self._client

    async def generate(self, request: LLMRequest) -> LLMResponse:
        start_time = time.perf_counter()
        payload = self._build_request(request)

        try:
            response = await self.client.messages.create(**payload)
        except APITimeoutError as e:
            raise TimeoutError(
                f"Anthropic request timed out after {self._timeout}s",
                provider=self.name,
            ) from e
        except APIConnectionError as e:
            raise ProviderError(
                f"Failed to connect to Anthropic: {e}",
                provider=self.name,
            ) from e
        except APIStatusError as e:
            self.raise_for_status(e)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return self._parse_response(response, latency_ms)

    def _build_request(self, request: LLMRequest) -> dict[str, Any]:
        """Convert LLMRequest to Anthropic API format.

        System messages become the top-level ``system`` parameter.
        """
        system_parts = [m.content for m in request.messages if m.role == "system"]
        if request.response_format and request.response_format.type == "json_object":
            system_parts.append(JSON_ONLY_INSTRUCTION)

        payload: dict[str, Any] = {
            "model": request.model or self._default_model,
            "messages": [
                {"role": m.role, "content": m.content}
                for m in request.messages
                if m.role != "system"
            ],
            "max_tokens": request.max_tokens or 4096,
            # Anthropic accepts 0-1
            "temperature": min(request.temperature, 1.0),
        }
        if system_parts:
            payload["system"] = "\n\n".join(system_parts)
        if request.stop:
            payload["stop_sequences"] = request.stop
        return payload

    def _parse_response(self, response: Any, latency_ms: int) -> LLMResponse:
        text_parts = [block.text for block in response.content if block.type == "text"]
        return LLMResponse(
            text="\n".join(text_parts) if text_parts else None,
            finish_reason=FINISH_REASONS.get(response.stop_reason, response.stop_reason or "stop"),
            usage=Usage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
                total_tokens=response.usage.input_tokens + response.usage.output_tokens,
            ),
            model=response.model,
            provider=self.name,
            latency_ms=latency_ms,
            request_id=response.id,
        )
