"""Word timeline normalization and text-to-timestamp alignment.

WHY: Every analyzer consumes the word-timing sequence, and two of them
(disfluency and sentence analysis) also need to know where each word
sits in the transcript text. Re-finding a word with an independent
substring search per lookup aligns repeated words ("test test") to the
wrong timing entry. A single monotonic cursor avoids that.

HOW: normalize_words() makes a defensive, start-ordered copy of the
word timings. locate_words() walks the text once, left to right, and
assigns each word timing the character offset of its first occurrence
at or after the end of the previous located word.

RULES:
- Missing or empty input is valid and yields an empty timeline
- Ordering is a stable sort by start time (ties keep input order)
- The alignment cursor only moves forward; a word that cannot be found
  gets offset None and does not move the cursor
- Matching is case-insensitive; if the literal ASR word is absent, the
  word with surrounding punctuation stripped is tried
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from speech_metrics.core.ir import WordTiming

# Characters stripped from a word before the fallback text search.
_WORD_PUNCTUATION = ".,;:!?\"'()[]{}…“”‘’"


def normalize_words(words: Optional[Iterable[WordTiming]]) -> List[WordTiming]:
    """Return an ordered, defensively-copied list of word timings.

    RULES:
    - None or empty input returns []
    - Never raises on missing input
    - The caller's sequence is not modified
    """
    if not words:
        return []
    return sorted(words, key=lambda w: w.start_s)


def speech_span(words: List[WordTiming]) -> Optional[Tuple[float, float]]:
    """(first word start, last word end), or None without words."""
    if not words:
        return None
    return words[0].start_s, words[-1].end_s


def locate_words(text: str, words: List[WordTiming]) -> List[Optional[int]]:
    """Find the character offset of each word timing in the transcript text.

    WHY: Disfluency matches and sentence spans are found in the text,
    but their timestamps live on the word timings. This builds the
    bridge once so both analyzers share the same alignment.

    HOW: Keep a cursor into the lower-cased text. For each word, search
    forward from the cursor for the lower-cased word, falling back to
    the punctuation-stripped form. On a hit, record the offset and move
    the cursor past the word.

    Args:
        text: The full transcript text.
        words: Normalized word timings (see normalize_words).

    Returns:
        One entry per word: its offset in text, or None if not found.
    """
    haystack = text.lower()
    offsets: List[Optional[int]] = []
    cursor = 0

    for timing in words:
        needle = timing.word.lower()
        index = haystack.find(needle, cursor) if needle else -1
        if index < 0:
            stripped = needle.strip(_WORD_PUNCTUATION)
            if stripped and stripped != needle:
                needle = stripped
                index = haystack.find(needle, cursor)
        if index < 0:
            offsets.append(None)
            continue
        offsets.append(index)
        cursor = index + len(needle)

    return offsets
