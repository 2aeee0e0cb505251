#!/usr/bin/env python3
"""Quote verification CLI for article drafts.

Checks every quotation in a draft against the interview transcript and
any supporting documents, prints the result per quote, and writes the
Markdown draft plus its provenance record to an export directory.

Usage:
    # Verify a draft against its transcript
    python scripts/verify_draft.py --draft article.md --transcript interview.txt

    # With supporting documents and a cited link (links carry no text)
    python scripts/verify_draft.py --draft article.md --transcript interview.txt \
        --source report.txt --source notes.md --url https://example.com/study

    # Ask the AI verifier about quotes the local check cannot find
    python scripts/verify_draft.py --draft article.md --transcript interview.txt --ai

    # CI mode: exit non-zero if any quote is unverified
    python scripts/verify_draft.py --draft article.md --transcript interview.txt --ci
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from interview2article.models import SourceType, SupportingSource, WorkflowState, normalize_tone
from interview2article.services.provenance_exporter import (
    FileExportSink,
    export_markdown,
    export_provenance,
)
from interview2article.services.report_assembler import VerificationReport
from interview2article.services.verification_service import build_matcher, check_quotes

logger = logging.getLogger("verify_draft")


def load_sources(files: list[Path], urls: list[str]) -> list[SupportingSource]:
    """Supporting sources in command-line order: files first, then links."""
    sources = [
        SupportingSource(
            id=f"source-{i}",
            type=SourceType.file,
            name=path.name,
            content=path.read_text(encoding="utf-8"),
        )
        for i, path in enumerate(files, start=1)
    ]
    for url in urls:
        sources.append(SupportingSource(id=f"source-{len(sources) + 1}", type=SourceType.url, value=url))
    return sources


def print_report(report: VerificationReport, verbose: bool = False) -> None:
    print("=" * 70)
    print("QUOTE VERIFICATION")
    print("=" * 70)
    for entry in report.entries:
        symbol = "✓" if entry.verified else "✗"
        print(f'{symbol} "{entry.quote.text}"')
        print(f"    source: {entry.result.source_label}")
        if verbose and entry.result.snippet:
            print(f"    snippet: {entry.result.snippet}")
            if entry.result.location_hint:
                print(f"    location: {entry.result.location_hint}")
    print("=" * 70)
    print(f"Verified: {report.verified_count}/{report.total}  Unverified: {report.unverified_count}")
    print("=" * 70)


async def run(args: argparse.Namespace) -> VerificationReport:
    state = WorkflowState(
        transcript=args.transcript.read_text(encoding="utf-8"),
        supporting_sources=load_sources(args.source, args.url),
        tone=normalize_tone(args.tone),
        draft=args.draft.read_text(encoding="utf-8"),
    )
    report = await check_quotes(
        state.draft,
        state.transcript,
        state.supporting_sources,
        matcher=build_matcher(use_ai=args.ai),
    )

    if not args.no_export:
        sink = FileExportSink(args.out_dir) if args.out_dir else FileExportSink()
        await export_markdown(state.draft, sink)
        await export_provenance(state, report, sink)
        logger.info("Exports written to %s", sink.export_dir)

    return report


def main():
    parser = argparse.ArgumentParser(
        description="Verify the quotations in an article draft against its sources"
    )
    parser.add_argument("--draft", type=Path, required=True, help="Path to draft markdown file")
    parser.add_argument("--transcript", type=Path, required=True, help="Path to transcript file")
    parser.add_argument("--source", type=Path, action="append", default=[],
                        help="Supporting document (repeatable)")
    parser.add_argument("--url", action="append", default=[],
                        help="Supporting link, cited but not searched (repeatable)")
    parser.add_argument("--tone", help="Tone recorded in the provenance metadata")
    parser.add_argument("--ai", action="store_true",
                        help="Consult the AI verifier for quotes not found locally")
    parser.add_argument("--out-dir", type=Path, help="Export directory (default: $EXPORT_DIR)")
    parser.add_argument("--no-export", action="store_true", help="Skip writing export files")
    parser.add_argument("--ci", action="store_true",
                        help="CI mode: exit non-zero if any quote is unverified")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show snippets and locations")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    report = asyncio.run(run(args))
    print_report(report, verbose=args.verbose)

    if args.ci and report.unverified_count:
        sys.exit(1)


if __name__ == "__main__":
    main()
