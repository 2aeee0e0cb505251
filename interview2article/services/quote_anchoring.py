"""Fuzzy quote anchoring.

Optional extension to exact matching: finds the window of a source text
that best resembles a quote which was lightly edited (a changed word, a
typo) on its way into the draft. Works on normalized text; offsets are
valid in the original text because normalization keeps lengths.
"""

from difflib import SequenceMatcher

DEFAULT_SIMILARITY_THRESHOLD = 0.85
MIN_ANCHOR_LENGTH = 10

# Windows scoring below this are not refined
CANDIDATE_FLOOR = 0.5


def find_best_match_window(needle: str, haystack: str) -> tuple[int, int, float] | None:
    """Find the window of ``haystack`` most similar to ``needle``.

    Slides windows slightly shorter and longer than the needle across the
    haystack, then snaps the best window outward to word boundaries.

    Returns:
        Tuple of (start, end, similarity) or None if nothing comes close.
    """
    needle_len = len(needle)
    if needle_len < MIN_ANCHOR_LENGTH or len(haystack) < MIN_ANCHOR_LENGTH:
        return None

    best = (0, 0, 0.0)
    window_sizes = [
        size
        for size in (needle_len - 5, needle_len, needle_len + 5, needle_len + 10)
        if size >= MIN_ANCHOR_LENGTH
    ]

    for window_size in window_sizes:
        step = max(1, window_size // 8)
        for start in range(0, max(1, len(haystack) - window_size + 1), step):
            end = min(start + window_size, len(haystack))
            score = SequenceMatcher(None, needle, haystack[start:end]).ratio()
            if score > best[2]:
                best = (start, end, score)

    start, end, score = best
    if score < CANDIDATE_FLOOR:
        return None

    # Snap to word boundaries, looking at most 5 characters outward
    for i in range(start, max(-1, start - 6), -1):
        if i == 0 or not haystack[i - 1].isalnum():
            start = i
            break
    for i in range(end, min(len(haystack), end + 5) + 1):
        if i == len(haystack) or not haystack[i].isalnum():
            end = i
            break

    return start, end, SequenceMatcher(None, needle, haystack[start:end]).ratio()


def anchor_quote(
    needle: str,
    haystack: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> tuple[int, int, float] | None:
    """Anchor a normalized quote in normalized source text.

    Returns:
        (start, end, similarity) when the best window reaches ``threshold``.
    """
    if not needle or not haystack:
        return None

    match = find_best_match_window(needle, haystack)
    if match is None or match[2] < threshold:
        return None
    return match
