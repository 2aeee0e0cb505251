"""Source corpus index.

Holds the transcript and the supporting sources as addressable units,
each with a normalized copy of its text for case-insensitive matching.
Caller-provided text is never modified; the original casing is kept on
the unit for snippet display.

Normalization is length-preserving, so an offset found in the
normalized text is also a valid offset into the original text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from interview2article.models.provenance import TRANSCRIPT_SOURCE_TYPE
from interview2article.models.workflow import SupportingSource

TRANSCRIPT_SOURCE_ID = "transcript"
TRANSCRIPT_LABEL = "Interview Transcript"

# Single characters folded before comparison
CHAR_FOLDS = str.maketrans({
    "\u201c": '"',
    "\u201d": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u00a0": " ",
})


def normalize_for_matching(text: str) -> str:
    """Lowercase and fold typographic quotes, keeping the length unchanged.

    Characters whose lowercase form is longer than one character
    (e.g. U+0130) are left as they are.
    """
    return "".join(_lower_char(char) for char in text.translate(CHAR_FOLDS))


def _lower_char(char: str) -> str:
    lowered = char.lower()
    return lowered if len(lowered) == 1 else char


class SourceKind(str, Enum):
    transcript = "transcript"
    supporting = "supporting"


@dataclass(frozen=True)
class SourceUnit:
    """One addressable member of the corpus.

    ``position`` is the enumeration order: 0 for the transcript,
    1.. for supporting sources in the order they were added.
    """

    id: str
    kind: SourceKind
    name: str
    source_type: str
    position: int
    text: str | None = field(default=None, repr=False)
    normalized: str | None = field(default=None, repr=False, compare=False)

    @property
    def matchable(self) -> bool:
        """Identity-only units (no text) are never match candidates."""
        return bool(self.text and self.text.strip())

    @property
    def label(self) -> str:
        """Human-readable source name used in reports."""
        if self.kind == SourceKind.transcript:
            return TRANSCRIPT_LABEL
        return self.name

    @classmethod
    def for_transcript(cls, transcript: str | None) -> SourceUnit:
        text = transcript or ""
        return cls(
            id=TRANSCRIPT_SOURCE_ID,
            kind=SourceKind.transcript,
            name=TRANSCRIPT_LABEL,
            source_type=TRANSCRIPT_SOURCE_TYPE,
            position=0,
            text=text,
            normalized=normalize_for_matching(text),
        )

    @classmethod
    def for_supporting(cls, source: SupportingSource, position: int) -> SourceUnit:
        text = source.content if source.has_text else None
        return cls(
            id=source.id,
            kind=SourceKind.supporting,
            name=source.display_name,
            source_type=source.type.value,
            position=position,
            text=text,
            normalized=normalize_for_matching(text) if text else None,
        )


class CorpusIndex:
    """Searchable view of one verification pass's sources."""

    def __init__(self, transcript: SourceUnit, supporting: Iterable[SourceUnit] = ()):
        self._transcript = transcript
        self._supporting = tuple(supporting)
        self._by_id: dict[str, SourceUnit] = {}
        for unit in self.units:
            # first unit wins when ids collide
            self._by_id.setdefault(unit.id, unit)

    @classmethod
    def build(
        cls,
        transcript: str | None,
        supporting_sources: Iterable[SupportingSource] = (),
    ) -> CorpusIndex:
        return cls(
            SourceUnit.for_transcript(transcript),
            (
                SourceUnit.for_supporting(source, position)
                for position, source in enumerate(supporting_sources, start=1)
            ),
        )

    @property
    def transcript(self) -> SourceUnit:
        return self._transcript

    @property
    def supporting(self) -> tuple[SourceUnit, ...]:
        return self._supporting

    @property
    def units(self) -> tuple[SourceUnit, ...]:
        """All units in precedence order: transcript, then supporting sources."""
        return (self._transcript, *self._supporting)

    @property
    def matchable_units(self) -> tuple[SourceUnit, ...]:
        return tuple(unit for unit in self.units if unit.matchable)

    @property
    def is_empty(self) -> bool:
        """True when no unit has any text to verify against."""
        return not self.matchable_units

    def get(self, source_id: str) -> SourceUnit:
        """Look up a unit by id.

        Raises:
            ValueError: If no unit has this id.
        """
        try:
            return self._by_id[source_id]
        except KeyError:
            raise ValueError(f"Unknown source: {source_id}") from None

    def find_occurrence(self, source_id: str, needle: str) -> int | None:
        """Offset of the first case-insensitive occurrence of ``needle``.

        Returns None for identity-only sources and blank needles.
        """
        return self.occurrence_in(self.get(source_id), needle)

    @staticmethod
    def occurrence_in(unit: SourceUnit, needle: str) -> int | None:
        if not unit.matchable or not needle or not needle.strip():
            return None
        offset = unit.normalized.find(normalize_for_matching(needle))
        return offset if offset >= 0 else None


def build_index(
    transcript: str | None,
    supporting_sources: Iterable[SupportingSource] = (),
) -> CorpusIndex:
    """Build the index for one verification pass."""
    return CorpusIndex.build(transcript, supporting_sources)
