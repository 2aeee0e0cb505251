"""Quote extraction from draft text.

Scans a draft once, left to right, and returns the quoted spans that
need provenance. Delimiters come in configurable open/close pairs so
straight and typographic quotes are handled by the same scan.

Rules:
- A span runs from an opening delimiter to the nearest matching closing
  delimiter of the same pair, within the same paragraph.
- Openers without a matching closer are skipped and scanning resumes on
  the next character; an unterminated quote produces nothing.
- Quotes nested inside a span are not reported separately.
- Apostrophe-like delimiters only open at the start of a word and only
  close at the end of one, so contractions and possessives are ignored.
- A leading elision such as '90s is dropped as an opener when another
  quote of the same pair opens before it would close.
- Spans shorter than ``MIN_QUOTE_LENGTH`` after trimming are emphasis or
  inline terms, not quotations, and are dropped.
"""

import re
from dataclasses import dataclass

# Trimmed spans of at least this many characters are kept
MIN_QUOTE_LENGTH = 10

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class DelimiterPair:
    """An opening/closing quotation mark pair."""

    open: str
    close: str
    word_bounded: bool = False


DEFAULT_DELIMITERS: tuple[DelimiterPair, ...] = (
    DelimiterPair('"', '"'),
    DelimiterPair("\u201c", "\u201d"),
    DelimiterPair("'", "'", word_bounded=True),
    DelimiterPair("\u2018", "\u2019", word_bounded=True),
)


@dataclass(frozen=True)
class Quote:
    """A quoted span of the draft.

    ``text`` has delimiters stripped and surrounding whitespace trimmed.
    ``start`` is the offset of the opening delimiter, ``end`` the offset
    just past the closing one.
    """

    text: str
    start: int | None = None
    end: int | None = None


def _opens_at(draft: str, pos: int, pair: DelimiterPair) -> bool:
    if not draft.startswith(pair.open, pos):
        return False
    if pair.word_bounded and pos > 0 and draft[pos - 1].isalnum():
        return False
    return True


def _starts_word_quote(draft: str, pos: int, pair: DelimiterPair) -> bool:
    after = pos + len(pair.open)
    return (
        draft.startswith(pair.open, pos)
        and (pos == 0 or draft[pos - 1].isspace())
        and after < len(draft)
        and draft[after].isalnum()
    )


def _find_close(draft: str, start: int, limit: int, pair: DelimiterPair) -> int | None:
    pos = start
    while True:
        pos = draft.find(pair.close, pos, limit)
        if pos == -1:
            return None
        after = pos + len(pair.close)
        if pair.word_bounded and after < len(draft) and draft[after].isalnum():
            # a fresh quote opens before this one closed: the opener was an elision
            if _starts_word_quote(draft, pos, pair):
                return None
            pos = after
            continue
        return pos


def _paragraph_end(draft: str, start: int) -> int:
    match = PARAGRAPH_BREAK.search(draft, start)
    return match.start() if match else len(draft)


def extract_quotes(
    draft: str,
    delimiters: tuple[DelimiterPair, ...] = DEFAULT_DELIMITERS,
    min_length: int = MIN_QUOTE_LENGTH,
) -> list[Quote]:
    """Extract quoted spans from a draft, in draft order.

    Args:
        draft: The draft text.
        delimiters: Recognised delimiter pairs, checked in order.
        min_length: Minimum trimmed span length to keep.

    Returns:
        Quotes in order of appearance. Empty when the draft has none.
    """
    quotes: list[Quote] = []
    if not draft:
        return quotes

    pos = 0
    while pos < len(draft):
        pair = next((p for p in delimiters if _opens_at(draft, pos, p)), None)
        if pair is None:
            pos += 1
            continue

        body_start = pos + len(pair.open)
        close = _find_close(draft, body_start, _paragraph_end(draft, body_start), pair)
        if close is None:
            pos += 1
            continue

        text = draft[body_start:close].strip()
        end = close + len(pair.close)
        if len(text) >= min_length:
            quotes.append(Quote(text=text, start=pos, end=end))
        pos = end

    return quotes
