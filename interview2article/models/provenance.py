"""Provenance record schema.

The exported audit artifact tying a draft back to its sources. Field
names are camelCase because the JSON document is consumed as-is by
the browser client and by downstream reviewers.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TRANSCRIPT_SOURCE_TYPE = "interview_transcript"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ProvenanceMetadata(_Frozen):
    generatedAt: datetime
    tone: str
    wordCount: int = Field(ge=0)


class TranscriptEntry(_Frozen):
    content: str
    type: str = TRANSCRIPT_SOURCE_TYPE


class SupportingSourceEntry(_Frozen):
    """A supporting source as cited in the record.

    ``index`` is the 1-based display position, independent of ``id``.
    """

    id: str
    name: str
    type: str
    value: str
    index: int = Field(ge=1)


class ProvenanceSources(_Frozen):
    transcript: TranscriptEntry
    supportingSources: list[SupportingSourceEntry] = Field(default_factory=list)


class ProvenanceQuote(_Frozen):
    text: str
    verified: bool
    source: str
    snippet: str | None = None


class DraftEntry(_Frozen):
    content: str
    characterCount: int = Field(ge=0)


class ProvenanceRecord(_Frozen):
    """Immutable once built; serialized with ``model_dump_json``."""

    metadata: ProvenanceMetadata
    sources: ProvenanceSources
    keyPoints: list[str] = Field(default_factory=list)
    quotes: list[ProvenanceQuote] = Field(default_factory=list)
    draft: DraftEntry
