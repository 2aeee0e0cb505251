"""Prompt templates for the AI collaborators.

Contains system and user prompts for:
1. Key point extraction from an interview transcript
2. Tone-directed article draft generation
3. Quote verification against source materials
"""

from __future__ import annotations

from typing import Iterable, Optional

from interview2article.models.workflow import DEFAULT_TONE, SupportingSource, Tone


# ==============================================================================
# Key Point Extraction
# ==============================================================================

KEY_POINTS_SYSTEM_PROMPT = """You are an expert at extracting key points from interview transcripts. Extract 5-10 clear, concise bullet points that capture the most important insights, quotes, and themes from the transcript. Each bullet point should be specific and actionable for article writing."""


def build_key_points_prompt(
    transcript: str,
    sources: Optional[Iterable[SupportingSource]] = None,
) -> str:
    """Build user prompt for key point extraction.

    Supporting sources are listed by display name only; their bodies are
    not part of the extraction context.
    """
    sources_context = ""
    listed = [source.display_name for source in (sources or [])]
    if listed:
        sources_context = "\n\nSupporting Sources:\n" + "\n".join(
            f"{i}. {name}" for i, name in enumerate(listed, start=1)
        )

    return f"""Please extract the key points from this interview transcript:

{transcript}{sources_context}

Return 5-10 bullet points that would be most valuable for writing an article. Focus on unique insights, important quotes, and main themes."""


# ==============================================================================
# Draft Generation
# ==============================================================================

TONE_INSTRUCTIONS: dict[Tone, str] = {
    Tone.professional: "Write in a professional, authoritative tone suitable for business publications. Use clear, direct language and maintain objectivity.",
    Tone.conversational: "Write in a friendly, conversational tone as if speaking directly to the reader. Use accessible language and personal pronouns.",
    Tone.analytical: "Write in an analytical, data-driven tone. Focus on insights, implications, and logical conclusions. Use precise language.",
    Tone.storytelling: "Write in an engaging, narrative style that tells a story. Use vivid descriptions and create emotional connections with readers.",
}

ARTICLE_STRUCTURE = """Structure your article with:
1. A compelling headline
2. An engaging introduction
3. 3-4 main sections with subheadings
4. A strong conclusion

Make sure to incorporate direct quotes where appropriate and reference supporting sources when relevant."""


def build_draft_system_prompt(tone: Tone | None, custom_prompt: Optional[str] = None) -> str:
    instruction = TONE_INSTRUCTIONS[tone or DEFAULT_TONE]
    prompt = f"You are an expert article writer. {instruction}\n\n{ARTICLE_STRUCTURE}"
    if custom_prompt and custom_prompt.strip():
        prompt += f"\n\nAdditional instructions: {custom_prompt.strip()}"
    return prompt


def build_draft_user_prompt(key_points: list[str]) -> str:
    numbered = "\n".join(f"{i}. {point}" for i, point in enumerate(key_points, start=1))
    return f"""Please write a comprehensive article based on these key points:

{numbered}

The article should be approximately 800-1200 words and include relevant quotes and insights from the key points. Make it engaging and informative for readers."""


# ==============================================================================
# Quote Verification
# ==============================================================================

QUOTE_CHECK_SYSTEM_PROMPT = """You are a fact-checker. Your job is to verify if a quote appears in the provided source materials. Return a JSON response with: {"found": boolean, "source": string, "snippet": string}. If found, "source" must be "TRANSCRIPT" or the exact "SUPPORTING SOURCE n" heading where the quote appears, and "snippet" a passage of surrounding context (50-100 words). If not found, set found to false."""


def build_source_materials(transcript: str | None, sources: Iterable[tuple[str, str, str | None]]) -> str:
    """Render the corpus as labelled sections.

    Args:
        transcript: Transcript text, may be empty.
        sources: (type, display name, text or None) per supporting source,
            in the order they were added.
    """
    sections: list[str] = []
    if transcript and transcript.strip():
        sections.append(f"TRANSCRIPT:\n{transcript}")

    for i, (source_type, name, text) in enumerate(sources, start=1):
        heading = f"SUPPORTING SOURCE {i} ({source_type}): {name}"
        sections.append(f"{heading}\n{text}" if text else heading)

    return "\n\n".join(sections)


def build_quote_check_prompt(quote: str, source_materials: str) -> str:
    return f"""Please verify if this quote appears in the source materials:

QUOTE TO VERIFY: "{quote}"

SOURCE MATERIALS:
{source_materials}"""
