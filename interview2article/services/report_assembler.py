"""Verification report assembly.

Pure aggregation: pairs each quote with its match result, keeps draft
order, and derives the verified/unverified partitions and counts. No
verification decision is made here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .quote_extractor import Quote
from .quote_matcher import MatchResult


@dataclass(frozen=True)
class QuoteVerification:
    """One quote and the result of matching it."""

    quote: Quote
    result: MatchResult

    @property
    def verified(self) -> bool:
        return self.result.verified

    def to_dict(self) -> dict[str, Any]:
        result = self.result
        return {
            "text": self.quote.text,
            "verified": result.verified,
            "source": result.source_label,
            "sourceId": result.matched_source.id if result.matched_source else None,
            "snippet": result.snippet,
            "locationHint": result.location_hint,
            "method": result.method.value,
            "confidence": result.confidence,
            "start": self.quote.start,
        }


@dataclass(frozen=True)
class VerificationReport:
    """Per-quote results in draft order, with derived partitions."""

    entries: tuple[QuoteVerification, ...] = ()

    @property
    def verified(self) -> list[QuoteVerification]:
        return [entry for entry in self.entries if entry.verified]

    @property
    def unverified(self) -> list[QuoteVerification]:
        return [entry for entry in self.entries if not entry.verified]

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def verified_count(self) -> int:
        return len(self.verified)

    @property
    def unverified_count(self) -> int:
        return self.total - self.verified_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "quotes": [entry.to_dict() for entry in self.entries],
            "summary": {
                "total": self.total,
                "verified": self.verified_count,
                "unverified": self.unverified_count,
            },
        }


def assemble_report(
    quotes: Sequence[Quote],
    matches: Sequence[MatchResult],
) -> VerificationReport:
    """Pair quotes with their match results.

    Raises:
        ValueError: If the sequences differ in length.
    """
    if len(quotes) != len(matches):
        raise ValueError(
            f"Expected one match per quote, got {len(matches)} matches for {len(quotes)} quotes"
        )
    return VerificationReport(
        entries=tuple(QuoteVerification(quote, match) for quote, match in zip(quotes, matches))
    )
