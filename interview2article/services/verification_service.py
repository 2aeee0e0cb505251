"""Quote verification pipeline.

draft + corpus -> extract quotes -> match each quote -> assemble report.

Configuration:
    QUOTE_CHECK_AI_ENABLED: "true", "false" or "auto" (default). In auto
        mode the AI verifier is used whenever an LLM provider key is set.
"""

import logging
import os
from typing import Iterable

from interview2article.llm import get_client
from interview2article.models.workflow import SupportingSource

from .corpus_index import build_index
from .quote_extractor import extract_quotes
from .quote_matcher import QuoteMatcher
from .quote_verifier import LLMQuoteVerifier
from .report_assembler import VerificationReport, assemble_report

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def is_ai_verification_enabled() -> bool:
    setting = os.environ.get("QUOTE_CHECK_AI_ENABLED", "auto").strip().lower()
    if setting in TRUE_VALUES:
        return True
    if setting in FALSE_VALUES:
        return False
    return get_client().has_available_provider()


def build_matcher(use_ai: bool | None = None) -> QuoteMatcher:
    """Matcher with the AI verifier attached when requested and enabled.

    ``use_ai=None`` defers to ``QUOTE_CHECK_AI_ENABLED``; ``use_ai=True``
    still requires the setting to allow it.
    """
    enabled = is_ai_verification_enabled()
    if use_ai is not None:
        enabled = enabled and use_ai
    return QuoteMatcher(verifier=LLMQuoteVerifier() if enabled else None)


def verify_draft(
    draft: str,
    transcript: str,
    sources: Iterable[SupportingSource] = (),
    matcher: QuoteMatcher | None = None,
) -> VerificationReport:
    """Verify a draft with the local policy only."""
    matcher = matcher or QuoteMatcher()
    quotes = extract_quotes(draft)
    index = build_index(transcript, sources)
    return assemble_report(quotes, [matcher.match(quote, index) for quote in quotes])


async def check_quotes(
    draft: str,
    transcript: str,
    sources: Iterable[SupportingSource] = (),
    matcher: QuoteMatcher | None = None,
) -> VerificationReport:
    """Verify a draft, consulting the matcher's external verifier if any.

    Never raises for collaborator failures; affected quotes keep their
    local result.
    """
    matcher = matcher or build_matcher()
    quotes = extract_quotes(draft)
    logger.info("Found %d quotes to verify", len(quotes))
    if not quotes:
        return VerificationReport()

    index = build_index(transcript, sources)
    if index.is_empty:
        logger.info("No source text available, all quotes unverified")

    report = assemble_report(quotes, await matcher.match_all(quotes, index))
    logger.info(
        "Quote verification complete: %d of %d verified",
        report.verified_count,
        report.total,
        extra={"ai_verifier": matcher.verifier is not None},
    )
    return report
