"""Vendor-neutral request and response models for LLM calls.

Only plain text and JSON completions are needed here: key point
extraction, draft generation and quote verification.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single message in the conversation."""

    role: Literal["system", "user", "assistant"]
    content: str


class ResponseFormat(BaseModel):
    """Requested output format.

    ``json_object`` asks the provider for a bare JSON object. Providers
    without a native JSON mode fall back to prompt instructions.
    """

    type: Literal["text", "json_object"] = "text"


class LLMRequest(BaseModel):
    """Vendor-neutral LLM request."""

    messages: list[ChatMessage]
    model: str = ""  # empty -> provider default
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    max_tokens: int | None = None
    response_format: ResponseFormat | None = None
    stop: list[str] | None = None
    metadata: dict[str, Any] | None = None


class Usage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class LLMResponse(BaseModel):
    """Vendor-neutral LLM response.

    ``finish_reason`` is normalised across providers: ``stop`` for a
    complete answer, ``length`` when the token limit cut the output.
    """

    text: str | None
    finish_reason: str
    usage: Usage
    model: str
    provider: str
    latency_ms: int
    request_id: str | None = None

    @property
    def truncated(self) -> bool:
        return self.finish_reason == "length"
