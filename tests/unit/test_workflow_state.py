"""Tests for the typed workflow state and its migrations."""

import pytest
from pydantic import ValidationError

from interview2article.models import (
    DEFAULT_TONE,
    WORKFLOW_STATE_VERSION,
    SourceType,
    SupportingSource,
    Tone,
    WorkflowStage,
    WorkflowState,
    migrate_workflow_state,
    normalize_tone,
)


class TestSupportingSource:
    def test_url_display_name(self):
        source = SupportingSource(id="1", type=SourceType.url, value="https://example.com")

        assert source.display_name == "https://example.com"

    def test_file_display_name(self):
        assert SupportingSource(id="1", type=SourceType.file, name="a.pdf").display_name == "a.pdf"

    def test_display_name_fallbacks(self):
        assert SupportingSource(id="1", type=SourceType.url).display_name == "Link"
        assert SupportingSource(id="1", type=SourceType.file).display_name == "Document"

    def test_has_text(self):
        assert SupportingSource(id="1", type=SourceType.file, content="body").has_text
        assert not SupportingSource(id="1", type=SourceType.file, content="  ").has_text
        assert not SupportingSource(id="1", type=SourceType.file).has_text

    def test_id_required(self):
        with pytest.raises(ValidationError):
            SupportingSource(id="", type=SourceType.file)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            SupportingSource(id="1", type="video")


class TestWorkflowState:
    def test_defaults(self):
        state = WorkflowState()

        assert state.version == WORKFLOW_STATE_VERSION
        assert state.stage == WorkflowStage.setup
        assert state.tone is None

    @pytest.mark.parametrize("fields,stage", [
        ({"transcript": "text"}, WorkflowStage.key_points),
        ({"transcript": "text", "key_points": ["a"]}, WorkflowStage.draft),
        ({"transcript": "text", "key_points": ["a"], "draft": "body"}, WorkflowStage.review),
    ])
    def test_stage(self, fields, stage):
        assert WorkflowState(**fields).stage == stage

    def test_payload_round_trip(self, sample_state_payload):
        state = WorkflowState.from_payload(sample_state_payload)

        assert WorkflowState.from_payload(state.to_payload()) == state
        assert state.to_payload()["tone"] == "analytical"

    def test_stage_key_ignored_on_restore(self, sample_state_payload):
        payload = {**sample_state_payload, "stage": "review"}

        assert WorkflowState.from_payload(payload).draft == sample_state_payload["draft"]

    def test_empty_payload(self):
        assert WorkflowState.from_payload(None) == WorkflowState()
        assert WorkflowState.from_payload({}) == WorkflowState()

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            WorkflowState.from_payload({"version": 2, "surprise": True})

    def test_from_payload_does_not_mutate_input(self, sample_state_payload):
        payload = {**sample_state_payload, "tone": "neutral"}

        WorkflowState.from_payload(payload)

        assert payload["tone"] == "neutral"


class TestNormalizeTone:
    @pytest.mark.parametrize("value,expected", [
        ("professional", Tone.professional),
        ("Storytelling", Tone.storytelling),
        (Tone.analytical, Tone.analytical),
        ("neutral", Tone.professional),
        ("excited", Tone.conversational),
        ("critical", Tone.analytical),
        ("whimsical", DEFAULT_TONE),
        (None, None),
        ("", None),
    ])
    def test_values(self, value, expected):
        assert normalize_tone(value) == expected


class TestLegacyMigration:
    def test_v1_local_storage_payload(self):
        legacy = {
            "transcript": "Raw transcript",
            "sourceUrl": "https://example.com/article",
            "fileName": "notes.docx",
            "keyPoints": '["Point one", "Point two", ""]',
            "selectedTone": "excited",
            "generatedDraft": "Draft body",
            "customPrompt": "Keep it short",
        }

        state = WorkflowState.from_payload(legacy)

        assert state.version == 2
        assert state.transcript == "Raw transcript"
        assert [(s.id, s.type, s.display_name) for s in state.supporting_sources] == [
            ("source-1", SourceType.url, "https://example.com/article"),
            ("source-2", SourceType.file, "notes.docx"),
        ]
        assert state.key_points == ["Point one", "Point two"]
        assert state.tone == Tone.conversational
        assert state.draft == "Draft body"
        assert state.custom_prompt == "Keep it short"

    def test_v1_file_only(self):
        state = WorkflowState.from_payload({"fileName": "deck.pdf"})

        assert state.supporting_sources[0].id == "source-1"
        assert state.supporting_sources[0].type == SourceType.file

    def test_v1_key_points_as_list(self):
        state = WorkflowState.from_payload({"keyPoints": ["a", "b"]})

        assert state.key_points == ["a", "b"]

    def test_v1_key_points_plain_string(self):
        state = WorkflowState.from_payload({"keyPoints": "not json"})

        assert state.key_points == ["not json"]

    def test_v2_legacy_tone_value(self):
        assert migrate_workflow_state({"version": 2, "tone": "critical"})["tone"] == "analytical"

    @pytest.mark.parametrize("version", [0, WORKFLOW_STATE_VERSION + 1])
    def test_unknown_version_rejected(self, version):
        with pytest.raises(ValueError, match="Unsupported workflow state version"):
            migrate_workflow_state({"version": version})

    @pytest.mark.parametrize("version", ["x", None, [2]])
    def test_non_numeric_version_rejected(self, version):
        with pytest.raises(ValueError, match="Invalid workflow state version"):
            WorkflowState.from_payload({"version": version, "transcript": "t"})
