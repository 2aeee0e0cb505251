"""Tests for provenance record building and export."""

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from interview2article.models import ProvenanceRecord, WorkflowState
from interview2article.services.provenance_exporter import (
    MARKDOWN_FILENAME,
    PROVENANCE_FILENAME,
    ExportArtifact,
    ExportSink,
    FileExportSink,
    build_provenance_record,
    character_count,
    export_markdown,
    export_provenance,
    parse_provenance,
    serialize_provenance,
    word_count,
)
from interview2article.services.verification_service import verify_draft

FIXED_TIME = datetime(2026, 1, 15, 12, 30, tzinfo=UTC)


class MemorySink(ExportSink):
    def __init__(self):
        self.artifacts: list[ExportArtifact] = []

    async def write(self, artifact: ExportArtifact) -> str:
        self.artifacts.append(artifact)
        return artifact.filename


@pytest.fixture
def state(sample_state_payload) -> WorkflowState:
    return WorkflowState.from_payload(sample_state_payload)


@pytest.fixture
def report(state):
    return verify_draft(state.draft, state.transcript, state.supporting_sources)


class TestDraftStatistics:
    def test_word_count_splits_on_whitespace_runs(self):
        assert word_count("one  two\n\tthree   ") == 3

    def test_word_count_empty(self):
        assert word_count("") == 0
        assert word_count("   \n") == 0

    def test_character_count(self):
        assert character_count("héllo\n") == 6


class TestBuildProvenanceRecord:
    def test_metadata(self, state, report):
        record = build_provenance_record(state, report, generated_at=FIXED_TIME)

        assert record.metadata.generatedAt == FIXED_TIME
        assert record.metadata.tone == "analytical"
        assert record.metadata.wordCount == word_count(state.draft)

    def test_missing_tone_is_empty_string(self, report):
        record = build_provenance_record(WorkflowState(draft="x"), report)

        assert record.metadata.tone == ""

    def test_sources_enumerated_from_one(self, state, report):
        record = build_provenance_record(state, report)

        transcript = record.sources.transcript
        assert transcript.content == state.transcript
        assert transcript.type == "interview_transcript"
        entries = record.sources.supportingSources
        assert [e.index for e in entries] == [1, 2]
        assert [e.id for e in entries] == ["src-1", "src-2"]
        assert entries[0].name == "memo.txt"
        assert entries[1].name == "https://example.com/post"
        assert entries[1].type == "url"
        assert entries[1].value == "https://example.com/post"

    def test_quotes_and_draft(self, state, report):
        record = build_provenance_record(state, report)

        assert record.keyPoints == ["Friday releases", "Team culture"]
        assert [(q.text, q.verified, q.source) for q in record.quotes] == [
            ("we ship on Fridays", True, "Interview Transcript"),
            ("an invented remark", False, "Not Found"),
        ]
        assert record.quotes[1].snippet is None
        assert record.draft.content == state.draft
        assert record.draft.characterCount == len(state.draft)

    def test_record_is_immutable(self, state, report):
        record = build_provenance_record(state, report)

        with pytest.raises(ValidationError):
            record.keyPoints = []


class TestSerialization:
    def test_round_trip(self, state, report):
        record = build_provenance_record(state, report)

        parsed = parse_provenance(serialize_provenance(record))

        assert parsed == record
        assert len(parsed.quotes) == report.total
        assert parsed.draft.characterCount == len(parsed.draft.content)

    def test_document_shape(self, state, report):
        data = json.loads(serialize_provenance(build_provenance_record(state, report)))

        assert set(data) == {"metadata", "sources", "keyPoints", "quotes", "draft"}
        assert set(data["metadata"]) == {"generatedAt", "tone", "wordCount"}
        assert set(data["sources"]) == {"transcript", "supportingSources"}
        assert set(data["sources"]["supportingSources"][0]) == {"id", "name", "type", "value", "index"}
        assert set(data["quotes"][0]) == {"text", "verified", "source", "snippet"}
        assert set(data["draft"]) == {"content", "characterCount"}

    def test_identical_apart_from_timestamp(self, state, report):
        """Two exports of the same inputs differ only in generatedAt."""
        first = json.loads(serialize_provenance(build_provenance_record(state, report)))
        second = json.loads(
            serialize_provenance(build_provenance_record(state, report, generated_at=FIXED_TIME))
        )

        first["metadata"].pop("generatedAt")
        second["metadata"].pop("generatedAt")
        assert first == second

    def test_byte_identical_with_same_timestamp(self, state, report):
        first = serialize_provenance(build_provenance_record(state, report, generated_at=FIXED_TIME))
        second = serialize_provenance(build_provenance_record(state, report, generated_at=FIXED_TIME))

        assert first == second


class TestExport:
    @pytest.mark.asyncio
    async def test_export_provenance_to_sink(self, state, report):
        sink = MemorySink()

        artifact = await export_provenance(state, report, sink)

        assert sink.artifacts == [artifact]
        assert artifact.filename == PROVENANCE_FILENAME
        assert artifact.media_type == "application/json"
        record = ProvenanceRecord.model_validate_json(artifact.data)
        assert len(record.quotes) == 2

    @pytest.mark.asyncio
    async def test_timestamp_captured_at_export(self, state, report):
        before = datetime.now(UTC)
        artifact = await export_provenance(state, report)
        after = datetime.now(UTC)

        generated_at = parse_provenance(artifact.content).metadata.generatedAt
        assert before <= generated_at <= after

    @pytest.mark.asyncio
    async def test_export_without_sink(self, state, report):
        artifact = await export_provenance(state, report)

        assert artifact.content.startswith("{")

    @pytest.mark.asyncio
    async def test_export_markdown(self):
        sink = MemorySink()

        artifact = await export_markdown("# Title\n\nBody", sink)

        assert artifact.filename == MARKDOWN_FILENAME
        assert artifact.media_type == "text/markdown"
        assert artifact.content == "# Title\n\nBody"
        assert sink.artifacts == [artifact]

    @pytest.mark.asyncio
    async def test_file_sink_writes_files(self, tmp_path, state, report):
        sink = FileExportSink(tmp_path / "out")

        await export_markdown(state.draft, sink)
        await export_provenance(state, report, sink)

        assert (tmp_path / "out" / MARKDOWN_FILENAME).read_text(encoding="utf-8") == state.draft
        written = parse_provenance((tmp_path / "out" / PROVENANCE_FILENAME).read_text(encoding="utf-8"))
        assert written.draft.content == state.draft

    @pytest.mark.asyncio
    async def test_file_sink_returns_path(self, tmp_path):
        sink = FileExportSink(tmp_path)

        location = await sink.write(ExportArtifact("a.md", "text/markdown", "hello"))

        assert location == str(tmp_path / "a.md")
