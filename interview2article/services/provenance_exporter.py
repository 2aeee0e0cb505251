"""Provenance and draft export.

Builds the immutable provenance record for a completed workflow run,
serializes it, and hands the bytes to a sink (an HTTP download or a
file on disk). Nothing else is written anywhere.

Serialization is deterministic: two exports of the same state and
report differ only in ``metadata.generatedAt``.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import aiofiles

from interview2article.models.provenance import (
    DraftEntry,
    ProvenanceMetadata,
    ProvenanceQuote,
    ProvenanceRecord,
    ProvenanceSources,
    SupportingSourceEntry,
    TranscriptEntry,
)
from interview2article.models.workflow import WorkflowState

from .report_assembler import VerificationReport

logger = logging.getLogger(__name__)

PROVENANCE_FILENAME = "article-provenance.json"
MARKDOWN_FILENAME = "article-draft.md"

EXPORT_DIR = Path(os.environ.get("EXPORT_DIR", "exports"))


def word_count(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def character_count(text: str) -> int:
    return len(text)


@dataclass(frozen=True)
class ExportArtifact:
    """A serialized export ready for a sink."""

    filename: str
    media_type: str
    content: str

    @property
    def data(self) -> bytes:
        return self.content.encode("utf-8")


class ExportSink(ABC):
    """Destination for export artifacts."""

    @abstractmethod
    async def write(self, artifact: ExportArtifact) -> str:
        """Write the artifact and return where it went."""
        ...


class FileExportSink(ExportSink):
    """Writes artifacts into a directory, overwriting same-named files."""

    def __init__(self, export_dir: Path | None = None):
        self.export_dir = export_dir or EXPORT_DIR

    async def write(self, artifact: ExportArtifact) -> str:
        self.export_dir.mkdir(parents=True, exist_ok=True)
        path = self.export_dir / artifact.filename
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(artifact.content)
        logger.info("Wrote %s (%d bytes)", path, len(artifact.data))
        return str(path)


def build_provenance_record(
    state: WorkflowState,
    report: VerificationReport,
    generated_at: datetime | None = None,
) -> ProvenanceRecord:
    """Assemble the provenance record.

    Args:
        state: Workflow state holding transcript, sources, key points,
            tone and draft.
        report: Verification report for ``state.draft``.
        generated_at: Export time; defaults to now (UTC).
    """
    return ProvenanceRecord(
        metadata=ProvenanceMetadata(
            generatedAt=generated_at or datetime.now(UTC),
            tone=state.tone.value if state.tone else "",
            wordCount=word_count(state.draft),
        ),
        sources=ProvenanceSources(
            transcript=TranscriptEntry(content=state.transcript),
            supportingSources=[
                SupportingSourceEntry(
                    id=source.id,
                    name=source.display_name,
                    type=source.type.value,
                    value=source.value,
                    index=position,
                )
                for position, source in enumerate(state.supporting_sources, start=1)
            ],
        ),
        keyPoints=list(state.key_points),
        quotes=[
            ProvenanceQuote(
                text=entry.quote.text,
                verified=entry.result.verified,
                source=entry.result.source_label,
                snippet=entry.result.snippet,
            )
            for entry in report.entries
        ],
        draft=DraftEntry(content=state.draft, characterCount=character_count(state.draft)),
    )


def serialize_provenance(record: ProvenanceRecord) -> str:
    return record.model_dump_json(indent=2)


def parse_provenance(content: str | bytes) -> ProvenanceRecord:
    return ProvenanceRecord.model_validate_json(content)


async def export_provenance(
    state: WorkflowState,
    report: VerificationReport,
    sink: ExportSink | None = None,
) -> ExportArtifact:
    """Build, serialize and (optionally) write the provenance record.

    The timestamp is captured here, at export time.
    """
    record = build_provenance_record(state, report)
    artifact = ExportArtifact(
        filename=PROVENANCE_FILENAME,
        media_type="application/json",
        content=serialize_provenance(record),
    )
    logger.info(
        "Exporting provenance: %d quotes, %d sources",
        len(record.quotes),
        len(record.sources.supportingSources),
    )
    if sink is not None:
        await sink.write(artifact)
    return artifact


async def export_markdown(draft: str, sink: ExportSink | None = None) -> ExportArtifact:
    """Export the draft as-is as a Markdown file."""
    artifact = ExportArtifact(filename=MARKDOWN_FILENAME, media_type="text/markdown", content=draft)
    if sink is not None:
        await sink.write(artifact)
    return artifact
