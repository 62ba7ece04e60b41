"""Speaking rate in words per minute."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from speech_metrics.core.ir import WordTiming
from speech_metrics.core.timeline import normalize_words, speech_span


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() rounds halves to even; scores and rates use the
    conventional rounding so 2.5 becomes 3.
    """
    return int(math.floor(value + 0.5))


def words_per_minute(word_count: int, duration_s: float) -> Optional[int]:
    """round(word_count / (duration_s / 60)), or None unless the duration is finite and positive."""
    if not math.isfinite(duration_s) or duration_s <= 0:
        return None
    rate = word_count / (duration_s / 60.0)
    if not math.isfinite(rate):
        return None
    return round_half_up(rate)


def calculate_speaking_rate(words: Optional[Iterable[WordTiming]]) -> Optional[int]:
    """Overall words per minute from the first word's start to the last word's end.

    RULES:
    - No words -> None
    - Non-positive or non-finite span (single instant word, inverted or
      NaN timings) -> None
    """
    timeline = normalize_words(words)
    span = speech_span(timeline)
    if span is None:
        return None
    start, end = span
    return words_per_minute(len(timeline), end - start)
