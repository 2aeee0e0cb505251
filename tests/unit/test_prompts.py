"""Tests for prompt builders."""

from interview2article.models import SourceType, SupportingSource, Tone
from interview2article.services.prompts import (
    ARTICLE_STRUCTURE,
    TONE_INSTRUCTIONS,
    build_draft_system_prompt,
    build_draft_user_prompt,
    build_key_points_prompt,
    build_quote_check_prompt,
    build_source_materials,
)


class TestKeyPointsPrompt:
    def test_without_sources(self):
        prompt = build_key_points_prompt("The transcript")

        assert "The transcript" in prompt
        assert "Supporting Sources" not in prompt

    def test_with_sources(self):
        sources = [SupportingSource(id="1", type=SourceType.url, value="https://a.example")]

        assert "Supporting Sources:\n1. https://a.example" in build_key_points_prompt("t", sources)


class TestDraftPrompts:
    def test_every_tone_has_instructions(self):
        assert set(TONE_INSTRUCTIONS) == set(Tone)

    def test_system_prompt_structure(self):
        prompt = build_draft_system_prompt(Tone.conversational)

        assert TONE_INSTRUCTIONS[Tone.conversational] in prompt
        assert ARTICLE_STRUCTURE in prompt
        assert "Additional instructions" not in prompt

    def test_blank_custom_prompt_ignored(self):
        assert "Additional instructions" not in build_draft_system_prompt(Tone.analytical, "   ")

    def test_user_prompt_numbers_key_points(self):
        prompt = build_draft_user_prompt(["Alpha", "Beta"])

        assert "1. Alpha\n2. Beta" in prompt


class TestSourceMaterials:
    def test_sections(self):
        materials = build_source_materials(
            "Transcript body",
            [("file", "memo.txt", "Memo body"), ("url", "https://example.com", None)],
        )

        assert materials == (
            "TRANSCRIPT:\nTranscript body\n\n"
            "SUPPORTING SOURCE 1 (file): memo.txt\nMemo body\n\n"
            "SUPPORTING SOURCE 2 (url): https://example.com"
        )

    def test_empty_transcript_omitted(self):
        materials = build_source_materials("  ", [("file", "memo.txt", "Memo body")])

        assert not materials.startswith("TRANSCRIPT")

    def test_quote_check_prompt(self):
        prompt = build_quote_check_prompt("a quote", "MATERIALS")

        assert 'QUOTE TO VERIFY: "a quote"' in prompt
        assert prompt.endswith("SOURCE MATERIALS:\nMATERIALS")
