"""External quote verification collaborator.

An AI fact-checker consulted for quotes the local substring policy could
not verify. It is an injected strategy: ``QuoteMatcher`` calls it under a
timeout and falls back to the local result whenever it fails.
"""

from __future__ import annotations

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from interview2article.llm import ChatMessage, LLMClient, LLMRequest, ResponseFormat

from .corpus_index import CorpusIndex, SourceUnit
from .prompts import QUOTE_CHECK_SYSTEM_PROMPT, build_quote_check_prompt, build_source_materials

logger = logging.getLogger(__name__)

# Empty lets each provider use its own default model
QUOTE_CHECK_MODEL = os.environ.get("QUOTE_CHECK_MODEL", "")

CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")
SUPPORTING_HEADING = re.compile(r"supporting\s+source\s*#?\s*(\d+)")


class QuoteVerificationError(Exception):
    """The collaborator answered, but not with a usable verdict."""


@dataclass(frozen=True)
class VerifierVerdict:
    """Collaborator answer: ``{found, source, snippet}``."""

    found: bool
    source: str = ""
    snippet: str = ""


class QuoteVerifier(ABC):
    """Async strategy deciding whether a quote appears in the sources."""

    @abstractmethod
    async def verify(
        self,
        quote_text: str,
        transcript: str,
        sources: Sequence[SourceUnit],
    ) -> VerifierVerdict:
        """Check one quote.

        Raises:
            LLMError: The service failed.
            QuoteVerificationError: The answer could not be interpreted.
        """
        ...


class LLMQuoteVerifier(QuoteVerifier):
    """Fact-checks quotes with a chat completion returning JSON."""

    def __init__(self, client: LLMClient | None = None, model: str | None = None):
        self._client = client or LLMClient()
        self._model = model or QUOTE_CHECK_MODEL

    async def verify(
        self,
        quote_text: str,
        transcript: str,
        sources: Sequence[SourceUnit],
    ) -> VerifierVerdict:
        materials = build_source_materials(
            transcript,
            ((unit.source_type, unit.name, unit.text) for unit in sources),
        )
        request = LLMRequest(
            model=self._model,
            messages=[
                ChatMessage(role="system", content=QUOTE_CHECK_SYSTEM_PROMPT),
                ChatMessage(role="user", content=build_quote_check_prompt(quote_text, materials)),
            ],
            temperature=0.1,
            max_tokens=300,
            response_format=ResponseFormat(type="json_object"),
        )
        response = await self._client.generate(request)
        return parse_verdict(response.text)


def parse_verdict(text: str | None) -> VerifierVerdict:
    """Parse the collaborator's JSON answer, tolerating Markdown code fences.

    Raises:
        QuoteVerificationError: Empty, non-JSON, or missing ``found``.
    """
    if not text or not text.strip():
        raise QuoteVerificationError("Empty verification response")

    cleaned = CODE_FENCE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise QuoteVerificationError(f"Verification response is not JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("found"), bool):
        raise QuoteVerificationError("Verification response has no boolean 'found'")

    return VerifierVerdict(
        found=data["found"],
        source=str(data.get("source") or ""),
        snippet=str(data.get("snippet") or ""),
    )


def resolve_source(label: str, index: CorpusIndex) -> SourceUnit | None:
    """Map the source named in a verdict back to a corpus unit.

    Accepts the section headings used in the prompt (``TRANSCRIPT``,
    ``SUPPORTING SOURCE n``) and plain source names.
    """
    text = (label or "").strip().lower()
    if not text:
        return None

    if "transcript" in text:
        return index.transcript

    heading = SUPPORTING_HEADING.search(text)
    if heading:
        position = int(heading.group(1))
        if 1 <= position <= len(index.supporting):
            return index.supporting[position - 1]
        return None

    for unit in index.supporting:
        name = unit.name.lower()
        if name and (name == text or name in text):
            return unit
    return None
