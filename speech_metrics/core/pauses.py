"""Pause extraction and aggregate pause statistics.

WHY: Silence between words tells a coach two things: frequent long
pauses point to hesitation, while almost no pauses in a long talk
points to rushing. Both need the individual pauses and the totals.

HOW: Scan adjacent word pairs once. The gap between the end of one
word and the start of the next becomes a Pause when it is strictly
longer than the short-pause threshold.

RULES:
- Fewer than two words -> None (no gaps to measure)
- gap == threshold is NOT a pause (strict comparison)
- A pause starts at the end of the earlier word
- Negative gaps (overlapping timings) are never pauses
- long_pauses counts pauses strictly longer than the long-pause threshold
- avg_pause_duration_s is 0.0 when no pause was found
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from speech_metrics import config
from speech_metrics.core.ir import Pause, PauseReport, WordTiming
from speech_metrics.core.timeline import normalize_words


def analyze_pauses(
    words: Optional[Iterable[WordTiming]],
    short_threshold_s: float = config.SHORT_PAUSE_THRESHOLD_S,
    long_threshold_s: float = config.LONG_PAUSE_THRESHOLD_S,
) -> Optional[PauseReport]:
    """Extract pauses between adjacent words and summarize them.

    Args:
        words: Word timings (may be empty or None).
        short_threshold_s: Minimum gap, exclusive, for a pause.
        long_threshold_s: Minimum duration, exclusive, for a long pause.

    Returns:
        A PauseReport, or None with fewer than two words.
    """
    timeline = normalize_words(words)
    if len(timeline) < 2:
        return None

    pauses: List[Pause] = []
    for previous, current in zip(timeline, timeline[1:]):
        gap = current.start_s - previous.end_s
        if gap > short_threshold_s:
            pauses.append(Pause(start_s=previous.end_s, duration_s=gap))

    total = len(pauses)
    long_count = sum(1 for p in pauses if p.duration_s > long_threshold_s)
    average = sum(p.duration_s for p in pauses) / total if total else 0.0

    return PauseReport(
        total_pauses=total,
        long_pauses=long_count,
        avg_pause_duration_s=average,
        pauses=pauses,
    )
