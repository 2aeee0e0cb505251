"""AI service for the editorial stages.

Provides AI-powered features:
- Key point extraction from an interview transcript
- Article draft generation in a chosen tone
"""

import logging
import os
import re
from typing import Iterable, Optional

from interview2article.api.exceptions import DraftTooLongError
from interview2article.llm import ChatMessage, LLMClient, LLMRequest
from interview2article.models.workflow import SupportingSource, Tone

from .prompts import (
    KEY_POINTS_SYSTEM_PROMPT,
    build_draft_system_prompt,
    build_draft_user_prompt,
    build_key_points_prompt,
)

logger = logging.getLogger(__name__)

# Maximum transcript length (enforced at API level too)
MAX_TRANSCRIPT_LENGTH = 50_000

# Empty means provider default
KEY_POINTS_MODEL = os.environ.get("KEY_POINTS_MODEL", "")
DRAFT_MODEL = os.environ.get("DRAFT_MODEL", "")

# "- ", "* ", "• ", "1. ", "2) "
BULLET_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_key_points(text: str) -> list[str]:
    """Split a bulleted model answer into key points.

    Bullet markers and numbering are stripped; blank lines are dropped.
    """
    points = []
    for line in text.splitlines():
        point = BULLET_PREFIX.sub("", line).strip()
        if point:
            points.append(point)
    return points


async def extract_key_points(
    transcript: str,
    sources: Optional[Iterable[SupportingSource]] = None,
) -> list[str]:
    """Extract key points from a transcript using AI.

    Args:
        transcript: The interview transcript.
        sources: Supporting sources, listed by name for context.

    Returns:
        Key points in the order the model gave them.

    Raises:
        LLMError: If the AI request fails after retries and fallback.
    """
    client = LLMClient()

    request = LLMRequest(
        messages=[
            ChatMessage(role="system", content=KEY_POINTS_SYSTEM_PROMPT),
            ChatMessage(role="user", content=build_key_points_prompt(transcript, sources)),
        ],
        model=KEY_POINTS_MODEL,
        temperature=0.3,
        max_tokens=1000,
    )

    response = await client.generate(request)
    key_points = parse_key_points(response.text or "")
    logger.info("Extracted %d key points", len(key_points), extra={"provider": response.provider})
    return key_points


async def generate_draft(
    key_points: list[str],
    tone: Tone | None,
    custom_prompt: Optional[str] = None,
) -> str:
    """Generate an article draft from key points.

    Args:
        key_points: Key points to build the article around.
        tone: Article tone; None uses the default tone.
        custom_prompt: Extra direction appended to the system prompt.

    Returns:
        The draft text (Markdown).

    Raises:
        DraftTooLongError: If the model hit the token limit.
        LLMError: If the AI request fails after retries and fallback.
    """
    client = LLMClient()

    request = LLMRequest(
        messages=[
            ChatMessage(role="system", content=build_draft_system_prompt(tone, custom_prompt)),
            ChatMessage(role="user", content=build_draft_user_prompt(key_points)),
        ],
        model=DRAFT_MODEL,
        temperature=0.7,
        max_tokens=4000,
    )

    response = await client.generate(request)
    if response.truncated:
        logger.warning(
            "Draft truncated at token limit",
            extra={"provider": response.provider, "key_points": len(key_points)},
        )
        raise DraftTooLongError(len(key_points))

    return response.text or ""
