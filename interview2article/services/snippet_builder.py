"""Context snippets around located quotes.

A snippet is a symmetric window of ``CONTEXT_MARGIN`` characters on
each side of the match, clamped to the source text. An ellipsis marks
each side where the source continues beyond the window.
"""

CONTEXT_MARGIN = 50
ELLIPSIS = "..."


def line_number_at(text: str, offset: int) -> int:
    """1-based line number of ``offset`` (newlines before it, plus one)."""
    offset = max(0, min(offset, len(text)))
    return text.count("\n", 0, offset) + 1


def build_snippet(
    source_text: str,
    match_offset: int,
    quote_length: int,
    margin: int = CONTEXT_MARGIN,
) -> tuple[str, str]:
    """Extract bounded context around a match.

    Args:
        source_text: Original (not normalized) source text.
        match_offset: Offset of the match in ``source_text``.
        quote_length: Length of the matched text.
        margin: Characters of context on each side.

    Returns:
        Tuple of (snippet, location hint such as ``"line 3"``).
    """
    length = len(source_text)
    match_start = max(0, min(match_offset, length))
    match_end = max(match_start, min(match_start + max(quote_length, 0), length))

    window_start = max(0, match_start - margin)
    window_end = min(length, match_end + margin)

    snippet = source_text[window_start:window_end].strip()
    if window_start > 0:
        snippet = ELLIPSIS + snippet
    if window_end < length:
        snippet = snippet + ELLIPSIS

    return snippet, f"line {line_number_at(source_text, match_start)}"
