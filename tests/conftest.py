"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from interview2article.api.main import app
from interview2article.llm import LLMResponse, Usage
from interview2article.models import SourceType, SupportingSource


@pytest.fixture(autouse=True)
def offline_llm(monkeypatch: pytest.MonkeyPatch) -> None:
    """No test reaches a real LLM provider; AI quote checks start off."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setenv("QUOTE_CHECK_AI_ENABLED", "false")


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_llm_response(
    text: str = "Test response",
    finish_reason: str = "stop",
    provider: str = "openai",
) -> LLMResponse:
    """Create an LLMResponse for mocking LLMClient.generate."""
    return LLMResponse(
        text=text,
        finish_reason=finish_reason,
        usage=Usage(prompt_tokens=100, completion_tokens=50, total_tokens=150),
        model="test-model",
        provider=provider,
        latency_ms=100,
    )


@pytest.fixture
def llm_response():
    """Factory for mocked LLM responses."""
    return make_llm_response


@pytest.fixture
def sample_transcript() -> str:
    return (
        "Interviewer: How do releases work here?\n"
        "Engineer: Honestly, we ship on Fridays and nobody panics.\n"
        "Engineer: It was a breakthrough moment for the whole team."
    )


@pytest.fixture
def sample_sources() -> list[SupportingSource]:
    return [
        SupportingSource(
            id="src-1",
            type=SourceType.file,
            name="release-notes.pdf",
            content="The quarterly report describes a breakthrough moment in delivery speed.",
        ),
        SupportingSource(id="src-2", type=SourceType.url, value="https://example.com/blog"),
    ]


@pytest.fixture
def sample_state_payload() -> dict[str, Any]:
    return {
        "version": 2,
        "transcript": "The engineer said we ship on Fridays during the call.",
        "supporting_sources": [
            {
                "id": "src-1",
                "type": "file",
                "name": "memo.txt",
                "content": "Leadership called it a calculated risk worth taking.",
            },
            {"id": "src-2", "type": "url", "value": "https://example.com/post"},
        ],
        "key_points": ["Friday releases", "Team culture"],
        "tone": "analytical",
        "custom_prompt": "",
        "draft": 'As noted, "we ship on Fridays" remains the policy. '
                 'Critics called it "an invented remark".',
    }
