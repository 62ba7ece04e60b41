"""Sentence segmentation with per-sentence timing and pacing.

WHY: Average sentence length and the spread of speaking rates across
sentences are both clarity signals: very long sentences are hard to
follow, and a speaker who races through one sentence and crawls
through the next sounds uneven.

HOW: Split the text on terminal punctuation, then map each sentence's
character span onto the word timings located inside it (using the
shared forward-only alignment from timeline.locate_words). The first
and last member words give the sentence's time span.

RULES:
- Sentence = maximal run of non-terminal characters followed by one or
  more of ".", "!", "?"; abbreviations are not special-cased
- Trailing text after the last terminal punctuation is not a sentence
- No terminal punctuation at all -> the whole transcript is one
  sentence spanning the first word's start to the last word's end
- A sentence with no aligned word is dropped
- words_per_minute only when the sentence duration is positive
- word_count counts aligned words; the average sentence length counts
  whitespace-separated tokens of each kept sentence's text, so words the
  recognizer did not time still make a sentence longer
- Empty text or no word timings -> None
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from speech_metrics.core.ir import Sentence, SentenceReport, WordTiming
from speech_metrics.core.rate import words_per_minute
from speech_metrics.core.timeline import locate_words, normalize_words

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def _make_sentence(text: str, members: List[WordTiming]) -> Sentence:
    start = members[0].start_s
    end = members[-1].end_s
    return Sentence(
        text=text.strip(),
        start_s=start,
        end_s=end,
        word_count=len(members),
        words_per_minute=words_per_minute(len(members), end - start),
    )


def _token_count(sentence: Sentence) -> int:
    return len(sentence.text.split())


def segment_sentences(
    text: str,
    words: Optional[Iterable[WordTiming]],
) -> Optional[SentenceReport]:
    """Split a transcript into timed sentences.

    Args:
        text: The full transcript text.
        words: Word timings for the transcript (may be empty or None).

    Returns:
        A SentenceReport, or None when the text or the timings are empty.
    """
    timeline = normalize_words(words)
    if not text or not text.strip() or not timeline:
        return None

    matches = list(_SENTENCE_RE.finditer(text))
    if not matches:
        sentence = _make_sentence(text, timeline)
        return SentenceReport(
            sentences=[sentence],
            average_sentence_length_words=float(_token_count(sentence)),
        )

    # Offsets from the forward-only cursor are strictly increasing
    located = [
        (offset, word)
        for offset, word in zip(locate_words(text, timeline), timeline)
        if offset is not None
    ]

    sentences: List[Sentence] = []
    position = 0
    for match in matches:
        members: List[WordTiming] = []
        while position < len(located) and located[position][0] < match.end():
            offset, word = located[position]
            if offset >= match.start():
                members.append(word)
            position += 1
        if members:
            sentences.append(_make_sentence(match.group(0), members))

    total_words = sum(_token_count(s) for s in sentences)
    average = total_words / len(sentences) if sentences else 0.0

    return SentenceReport(sentences=sentences, average_sentence_length_words=average)

