"""Filler, hedge, and repetition detection with timestamp alignment.

WHY: Disfluencies are the strongest clarity signal a coach can point
at ("you said 'um' 6 times, here, here and here"). Fillers carry no
content, hedges carry content but undercut confidence, and immediate
repetitions break the flow. Each mark needs a timestamp so the UI can
jump to it.

HOW: Three passes over one transcript:
  1. Lexicon pass: every Filler/Hedge phrase is matched against the
     full text as a case-insensitive, whole-word regex.
  2. Alignment: matches are sorted by position and walked in lockstep
     with the located word timings (see timeline.locate_words); the
     word sitting at the match position, or up to two characters
     before it, supplies the timestamp.
  3. Repetition pass: adjacent word timings whose normalized text is
     identical and longer than one character become one mark.

RULES:
- Lexicon categories are FILLER and HEDGE; REPETITION is algorithmic only
- Filler and Hedge phrase sets must not overlap
- Matches from different phrases are all kept, never deduplicated
- A match with no aligned word still counts toward the totals but gets
  no timestamped mark
- No word timings -> no report (None); nothing found -> None
"""

from __future__ import annotations

import re
from collections import Counter
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from speech_metrics import config
from speech_metrics.core.ir import (
    DisfluencyCategory,
    DisfluencyMark,
    FillerWordReport,
    WordTiming,
)
from speech_metrics.core.timeline import locate_words, normalize_words

Lexicon = Mapping[DisfluencyCategory, FrozenSet[str]]

# Categories that may carry a phrase list, in scan order.
LEXICON_CATEGORIES = (DisfluencyCategory.FILLER, DisfluencyCategory.HEDGE)

# How far (in characters) before a match a word may start and still align.
ALIGNMENT_TOLERANCE = 2

_TRAILING_PUNCTUATION = ".,;!?"


def build_lexicon(
    mapping: Mapping[Union[str, DisfluencyCategory], Iterable[str]],
) -> Dict[DisfluencyCategory, FrozenSet[str]]:
    """Build a validated lexicon from a category -> phrases mapping.

    WHY: The word lists are tuning data, not algorithm. Callers localize
    or adjust them by passing a different mapping.

    HOW: Resolve each key to a DisfluencyCategory, lower-case and strip
    every phrase, then check the categories are disjoint.

    RULES:
    - Keys may be enum members or their values ("filler", "hedge")
    - Unknown categories raise ValueError
    - A phrase list for REPETITION raises ValueError
    - A phrase listed under both FILLER and HEDGE raises ValueError
    - Missing categories get an empty set
    """
    lexicon: Dict[DisfluencyCategory, FrozenSet[str]] = {
        category: frozenset() for category in LEXICON_CATEGORIES
    }
    for key, phrases in mapping.items():
        try:
            category = DisfluencyCategory(key)
        except ValueError:
            raise ValueError("Unknown disfluency category '{}'".format(key)) from None
        if category not in LEXICON_CATEGORIES:
            raise ValueError(
                "Category '{}' is detected algorithmically and takes no phrase list".format(
                    category.value
                )
            )
        cleaned = frozenset(
            " ".join(phrase.lower().split()) for phrase in phrases if phrase.strip()
        )
        lexicon[category] = cleaned

    overlap = lexicon[DisfluencyCategory.FILLER] & lexicon[DisfluencyCategory.HEDGE]
    if overlap:
        raise ValueError(
            "Phrases listed as both filler and hedge: {}".format(", ".join(sorted(overlap)))
        )
    return lexicon


DEFAULT_LEXICON = build_lexicon(config.DEFAULT_LEXICON_PHRASES)


@lru_cache(maxsize=256)
def _phrase_pattern(phrase: str) -> "re.Pattern[str]":
    """Whole-word, case-insensitive regex; inner spaces match any whitespace."""
    body = r"\s+".join(re.escape(part) for part in phrase.split())
    return re.compile(r"\b" + body + r"\b", re.IGNORECASE)


def _normalize_for_repetition(word: str) -> str:
    return word.lower().rstrip(_TRAILING_PUNCTUATION)


def _find_lexicon_matches(
    text: str,
    lexicon: Lexicon,
) -> List[Tuple[int, DisfluencyCategory, str]]:
    """All (offset, category, matched text) lexicon hits, ordered by offset."""
    matches: List[Tuple[int, DisfluencyCategory, str]] = []
    for category in LEXICON_CATEGORIES:
        for phrase in sorted(lexicon.get(category, ())):
            for match in _phrase_pattern(phrase).finditer(text):
                matches.append((match.start(), category, match.group(0)))
    # Stable: ties keep category then phrase order
    matches.sort(key=lambda m: m[0])
    return matches


def _align_matches(
    matches: List[Tuple[int, DisfluencyCategory, str]],
    words: List[WordTiming],
    offsets: List[Optional[int]],
) -> Tuple[List[DisfluencyMark], Counter]:
    """Attach a timestamp to each match by walking a forward-only word cursor.

    Returns the aligned marks and a per-category count of unaligned matches.
    """
    located = [(offset, word) for offset, word in zip(offsets, words) if offset is not None]
    marks: List[DisfluencyMark] = []
    unaligned: Counter = Counter()
    cursor = 0

    for start, category, phrase in matches:
        # Advance to the last located word starting at or before the match
        while cursor + 1 < len(located) and located[cursor + 1][0] <= start:
            cursor += 1
        if located and start - ALIGNMENT_TOLERANCE <= located[cursor][0] <= start:
            marks.append(DisfluencyMark(
                phrase=phrase,
                timestamp_s=located[cursor][1].start_s,
                category=category,
            ))
        else:
            unaligned[category] += 1

    return marks, unaligned


def find_repetitions(words: List[WordTiming]) -> List[DisfluencyMark]:
    """Immediate word repetitions ("the the"), timestamped at the first word.

    RULES:
    - Words are compared lower-cased with trailing punctuation stripped
    - Normalized words of one character ("a a", "I, I") are not flagged
    """
    marks: List[DisfluencyMark] = []
    for previous, current in zip(words, words[1:]):
        prev_norm = _normalize_for_repetition(previous.word)
        curr_norm = _normalize_for_repetition(current.word)
        if prev_norm == curr_norm and len(curr_norm) > 1:
            marks.append(DisfluencyMark(
                phrase="{} {}".format(prev_norm, curr_norm),
                timestamp_s=previous.start_s,
                category=DisfluencyCategory.REPETITION,
            ))
    return marks


def detect_disfluencies(
    text: str,
    words: Optional[Iterable[WordTiming]],
    lexicon: Optional[Lexicon] = None,
) -> Optional[FillerWordReport]:
    """Detect fillers, hedges, and repetitions in one transcript.

    Args:
        text: The full transcript text.
        words: Word timings for the transcript (may be empty or None).
        lexicon: Category -> phrases; defaults to the configured lexicon.

    Returns:
        A FillerWordReport, or None when there are no word timings or
        no disfluency was found.
    """
    timeline = normalize_words(words)
    if not timeline:
        return None
    if lexicon is None:
        lexicon = config.default_lexicon()

    matches = _find_lexicon_matches(text or "", lexicon)
    offsets = locate_words(text or "", timeline)
    marks, unaligned = _align_matches(matches, timeline, offsets)
    marks.extend(find_repetitions(timeline))

    if not marks and not unaligned:
        return None

    marks.sort(key=lambda m: m.timestamp_s)
    category_counts = {category: unaligned[category] for category in DisfluencyCategory}
    for mark in marks:
        category_counts[mark.category] += 1

    return FillerWordReport(
        count=len(marks) + sum(unaligned.values()),
        words=marks,
        category_counts=category_counts,
    )
