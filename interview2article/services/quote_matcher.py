"""Quote matcher.

Decides whether a quote is substantiated by the corpus and by which
source. Local policy, applied by ``match``:

1. The transcript is checked first; a case-insensitive substring hit
   there wins outright, since it is the record of what was said.
2. Otherwise supporting sources are checked in the order they were
   added; the earliest one containing the quote wins.
3. Otherwise the quote is unverified and reported as "Not Found".

Sources without text are never candidates. An empty corpus verifies
nothing and performs no comparisons.

``match_async`` and ``match_all`` add the optional external verifier:
it is consulted only for quotes the local policy left unverified, under
a per-call timeout, and any failure keeps the local result.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .corpus_index import CorpusIndex, SourceUnit, normalize_for_matching
from .quote_anchoring import anchor_quote
from .quote_extractor import Quote
from .quote_verifier import QuoteVerifier, VerifierVerdict, resolve_source
from .snippet_builder import CONTEXT_MARGIN, build_snippet

logger = logging.getLogger(__name__)

NOT_FOUND_LABEL = "Not Found"

QUOTE_CHECK_TIMEOUT_SECONDS = float(os.environ.get("QUOTE_CHECK_TIMEOUT_SECONDS", "20"))
QUOTE_CHECK_MAX_CONCURRENCY = int(os.environ.get("QUOTE_CHECK_MAX_CONCURRENCY", "4"))


class MatchMethod(str, Enum):
    """How a verification decision was reached."""

    exact = "exact"
    fuzzy = "fuzzy"
    ai = "ai"
    none = "none"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one quote.

    ``snippet`` and ``location_hint`` only accompany verified results,
    and a verified result always names a source that has text.
    ``confidence`` is 1.0 for exact hits, the similarity ratio for fuzzy
    ones, and None when unknown (unverified or decided by the verifier).
    """

    verified: bool
    matched_source: SourceUnit | None = None
    snippet: str | None = None
    location_hint: str | None = None
    method: MatchMethod = MatchMethod.none
    confidence: float | None = None

    def __post_init__(self) -> None:
        if self.verified:
            if self.matched_source is None or not self.matched_source.matchable:
                raise ValueError("A verified match needs a source with text")
        elif self.matched_source or self.snippet or self.location_hint:
            raise ValueError("An unverified match carries no source, snippet or location")

    @property
    def source_label(self) -> str:
        if self.verified:
            return self.matched_source.label
        return NOT_FOUND_LABEL


NOT_FOUND = MatchResult(verified=False)


class QuoteMatcher:
    """Matches quotes against a ``CorpusIndex``.

    Args:
        verifier: Optional external verifier for quotes the local policy
            cannot verify.
        timeout: Seconds allowed per verifier call.
        max_concurrency: Verifier calls in flight at once; 1 is sequential.
        fuzzy_threshold: Enables fuzzy anchoring at this similarity when set.
        context_margin: Snippet margin in characters.
    """

    def __init__(
        self,
        verifier: QuoteVerifier | None = None,
        timeout: float | None = None,
        max_concurrency: int | None = None,
        fuzzy_threshold: float | None = None,
        context_margin: int = CONTEXT_MARGIN,
    ):
        self._verifier = verifier
        self._timeout = timeout if timeout is not None else QUOTE_CHECK_TIMEOUT_SECONDS
        self._max_concurrency = max(1, max_concurrency or QUOTE_CHECK_MAX_CONCURRENCY)
        self._fuzzy_threshold = fuzzy_threshold
        self._context_margin = context_margin

    @property
    def verifier(self) -> QuoteVerifier | None:
        return self._verifier

    def match(self, quote: Quote, index: CorpusIndex) -> MatchResult:
        """Apply the local policy. Deterministic and side-effect free."""
        if index.is_empty:
            return NOT_FOUND

        result = self._match_exact(quote, index)
        if result is None and self._fuzzy_threshold is not None:
            result = self._match_fuzzy(quote, index)
        return result or NOT_FOUND

    async def match_async(self, quote: Quote, index: CorpusIndex) -> MatchResult:
        """Local policy first, then the external verifier if one is set."""
        local = self.match(quote, index)
        if local.verified or self._verifier is None or index.is_empty:
            return local

        try:
            verdict = await asyncio.wait_for(
                self._verifier.verify(quote.text, index.transcript.text or "", index.supporting),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Quote verifier timed out after %.1fs, using local result",
                self._timeout,
                extra={"quote_start": quote.start},
            )
            return local
        except Exception as e:
            logger.warning(
                "Quote verifier failed, using local result: %s",
                e,
                extra={"quote_start": quote.start, "error_type": type(e).__name__},
            )
            return local

        return self._from_verdict(verdict, quote, index) or local

    async def match_all(self, quotes: Sequence[Quote], index: CorpusIndex) -> list[MatchResult]:
        """Match every quote; results keep the order of ``quotes``."""
        if self._verifier is None:
            return [self.match(quote, index) for quote in quotes]

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(quote: Quote) -> MatchResult:
            async with semaphore:
                return await self.match_async(quote, index)

        return list(await asyncio.gather(*(bounded(quote) for quote in quotes)))

    def _match_exact(self, quote: Quote, index: CorpusIndex) -> MatchResult | None:
        for unit in index.matchable_units:
            offset = index.occurrence_in(unit, quote.text)
            if offset is not None:
                return self._located(unit, offset, len(quote.text), MatchMethod.exact, 1.0)
        return None

    def _match_fuzzy(self, quote: Quote, index: CorpusIndex) -> MatchResult | None:
        needle = normalize_for_matching(quote.text)
        for unit in index.matchable_units:
            anchor = anchor_quote(needle, unit.normalized, self._fuzzy_threshold)
            if anchor is not None:
                start, end, similarity = anchor
                return self._located(unit, start, end - start, MatchMethod.fuzzy, round(similarity, 3))
        return None

    def _located(
        self,
        unit: SourceUnit,
        offset: int,
        length: int,
        method: MatchMethod,
        confidence: float,
    ) -> MatchResult:
        snippet, location_hint = build_snippet(unit.text, offset, length, self._context_margin)
        return MatchResult(
            verified=True,
            matched_source=unit,
            snippet=snippet,
            location_hint=location_hint,
            method=method,
            confidence=confidence,
        )

    def _from_verdict(
        self,
        verdict: VerifierVerdict,
        quote: Quote,
        index: CorpusIndex,
    ) -> MatchResult | None:
        if not verdict.found:
            return None

        unit = resolve_source(verdict.source, index)
        if unit is None or not unit.matchable:
            logger.debug(
                "Verifier named an unusable source %r",
                verdict.source,
                extra={"quote_start": quote.start},
            )
            return None

        return MatchResult(
            verified=True,
            matched_source=unit,
            snippet=verdict.snippet.strip() or None,
            method=MatchMethod.ai,
        )


def match_quote(quote: Quote, index: CorpusIndex) -> MatchResult:
    """Match one quote with the default local policy."""
    return QuoteMatcher().match(quote, index)
