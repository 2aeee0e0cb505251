"""Services package for quote verification, export and AI generation."""

from . import ai_service
from . import provenance_exporter
from . import verification_service

from .corpus_index import CorpusIndex, SourceUnit, build_index, normalize_for_matching
from .quote_extractor import MIN_QUOTE_LENGTH, Quote, extract_quotes
from .quote_matcher import NOT_FOUND_LABEL, MatchMethod, MatchResult, QuoteMatcher, match_quote
from .report_assembler import QuoteVerification, VerificationReport, assemble_report
from .snippet_builder import build_snippet

__all__ = [
    "ai_service",
    "provenance_exporter",
    "verification_service",
    # Verification engine
    "extract_quotes",
    "Quote",
    "MIN_QUOTE_LENGTH",
    "build_index",
    "CorpusIndex",
    "SourceUnit",
    "normalize_for_matching",
    "QuoteMatcher",
    "MatchResult",
    "MatchMethod",
    "match_quote",
    "NOT_FOUND_LABEL",
    "build_snippet",
    "assemble_report",
    "VerificationReport",
    "QuoteVerification",
]
