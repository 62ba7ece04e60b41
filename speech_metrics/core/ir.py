"""Intermediate representation dataclasses for transcripts and derived metrics.

WHY: The ASR collaborator hands us a transcript with word timings, and
every analyzer (disfluency, pause, sentence, rate, clarity) reads from
that same input and produces its own report. A single, well-typed set
of dataclasses keeps the analyzers decoupled from the ingestion format
and from the formatters that render the results.

HOW: Two layers of dataclasses:
  WordTiming, Transcript: the immutable input snapshot
  DisfluencyMark, Pause, PauseReport, Sentence, SentenceReport,
  FillerWordReport, Deduction, ClarityBreakdown, SpeechAnalysis:
      derived, stateless projections of the input

RULES:
- All times are in float seconds
- Input dataclasses are frozen; Transcript.words is a tuple
- Optional reports are None when the input was insufficient, never zero-filled
- DisfluencyCategory is a closed enum, not a free-form string
- to_dict() methods produce the camelCase wire shape consumed downstream
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DisfluencyCategory(str, Enum):
    """Closed set of disfluency categories.

    RULES:
    - FILLER and HEDGE come from the lexicon
    - REPETITION is detected algorithmically, never from a word list
    """

    FILLER = "filler"
    HEDGE = "hedge"
    REPETITION = "repetition"


@dataclass(frozen=True)
class WordTiming:
    """One recognized word with its time span.

    RULES:
    - word: the ASR text for the word, punctuation attached as recognized
    - start_s <= end_s is guaranteed upstream, not re-validated here
    - confidence: per-word recognition confidence, None when not reported
    """

    word: str
    start_s: float
    end_s: float
    confidence: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "word": self.word,
            "startTime": self.start_s,
            "endTime": self.end_s,
        }
        if self.confidence is not None:
            data["confidence"] = self.confidence
        return data


@dataclass(frozen=True)
class Transcript:
    """A completed ASR result: full text, overall confidence, word timings.

    WHY: This is the only input of the engine. It is created once per
    completed recognition call and owned by the caller.

    RULES:
    - text: the full transcript as returned by the recognizer
    - confidence: overall recognition confidence in 0..1
    - words: ordered by start time; may be empty
    """

    text: str
    confidence: float
    words: tuple[WordTiming, ...] = ()


@dataclass(frozen=True)
class DisfluencyMark:
    """A single filler, hedge, or repetition occurrence.

    Marks have no identity beyond (phrase, timestamp_s, category) and
    are never deduplicated.
    """

    phrase: str
    timestamp_s: float
    category: DisfluencyCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.phrase,
            "timestamp": self.timestamp_s,
            "category": self.category.value,
        }


@dataclass
class FillerWordReport:
    """All disfluencies found in one transcript.

    RULES:
    - count includes textual matches that could not be aligned to a
      word timing; words only holds the aligned, timestamped marks
    - words is ordered by timestamp
    - category_counts has an entry for every DisfluencyCategory
    """

    count: int
    words: list[DisfluencyMark] = field(default_factory=list)
    category_counts: dict[DisfluencyCategory, int] = field(default_factory=dict)

    def count_for(self, category: DisfluencyCategory) -> int:
        return self.category_counts.get(category, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "words": [mark.to_dict() for mark in self.words],
            "categoryCounts": {
                category.value: self.count_for(category)
                for category in DisfluencyCategory
            },
        }


@dataclass(frozen=True)
class Pause:
    """A silence between two words, starting at the end of the earlier word."""

    start_s: float
    duration_s: float

    def to_dict(self) -> dict[str, Any]:
        return {"startTime": self.start_s, "duration": self.duration_s}


@dataclass
class PauseReport:
    """Aggregate pause statistics for one transcript.

    RULES:
    - total_pauses == len(pauses)
    - long_pauses counts pauses strictly above the long-pause threshold
    - avg_pause_duration_s is 0.0 when there are no pauses
    """

    total_pauses: int
    long_pauses: int
    avg_pause_duration_s: float
    pauses: list[Pause] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalPauses": self.total_pauses,
            "longPauses": self.long_pauses,
            "avgPauseDuration": self.avg_pause_duration_s,
            "pauseLocations": [pause.to_dict() for pause in self.pauses],
        }


@dataclass
class Sentence:
    """A sentence mapped back onto its covering word timings.

    words_per_minute is None when the sentence has no positive duration.
    """

    text: str
    start_s: float
    end_s: float
    word_count: int
    words_per_minute: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "text": self.text,
            "startTime": self.start_s,
            "endTime": self.end_s,
            "wordCount": self.word_count,
        }
        if self.words_per_minute is not None:
            data["wordsPerMinute"] = self.words_per_minute
        return data


@dataclass
class SentenceReport:
    """Sentences with timing plus the average sentence length in words."""

    sentences: list[Sentence]
    average_sentence_length_words: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "sentences": [sentence.to_dict() for sentence in self.sentences],
            "averageSentenceLength": self.average_sentence_length_words,
        }


@dataclass(frozen=True)
class Deduction:
    """Points subtracted from the clarity baseline by one named rule."""

    rule: str
    points: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "points": self.points, "reason": self.reason}


@dataclass
class ClarityBreakdown:
    """The clarity score together with every deduction that produced it.

    RULES:
    - score == max(0, min(100, round(baseline - sum(points))))
    - deductions only lists rules that subtracted a non-zero amount
    """

    baseline: int
    deductions: list[Deduction]
    score: int

    @property
    def total_deduction(self) -> int:
        return sum(d.points for d in self.deductions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseline": self.baseline,
            "deductions": [d.to_dict() for d in self.deductions],
            "score": self.score,
        }


@dataclass
class SpeechAnalysis:
    """The enriched transcript: the input plus every derived metric.

    WHY: Downstream consumers (feedback templates, metric visualizers,
    session persistence) read all metrics from one object. Each optional
    report is None when the input could not support it, so consumers can
    tell "not analyzed" apart from "zero".

    RULES:
    - transcript is the caller's snapshot, never modified
    - filler_words / pause_analysis / sentence_analysis / speaking_rate_wpm
      are None when not computable
    - processing_time_ms is call bookkeeping, never a scoring input
    """

    transcript: Transcript
    word_count: int
    duration_s: float
    clarity: ClarityBreakdown
    filler_words: FillerWordReport | None = None
    pause_analysis: PauseReport | None = None
    sentence_analysis: SentenceReport | None = None
    speaking_rate_wpm: int | None = None
    processing_time_ms: float = 0.0

    @property
    def clarity_score(self) -> int:
        return self.clarity.score

    @property
    def filler_percentage(self) -> float | None:
        """Disfluencies as a percentage of recognized words."""
        if self.filler_words is None or self.word_count == 0:
            return None
        return self.filler_words.count / self.word_count * 100

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape, omitting absent reports."""
        data: dict[str, Any] = {
            "transcript": self.transcript.text,
            "confidence": self.transcript.confidence,
            "wordCount": self.word_count,
            "durationSeconds": self.duration_s,
            "clarityScore": self.clarity_score,
            "processingTimeMs": self.processing_time_ms,
        }
        if self.transcript.words:
            data["wordTimeOffsets"] = [w.to_dict() for w in self.transcript.words]
        if self.speaking_rate_wpm is not None:
            data["wordsPerMinute"] = self.speaking_rate_wpm
        if self.filler_words is not None:
            data["fillerWords"] = self.filler_words.to_dict()
            data["fillerPercentage"] = self.filler_percentage
        if self.pause_analysis is not None:
            data["pauseAnalysis"] = self.pause_analysis.to_dict()
        if self.sentence_analysis is not None:
            data["sentenceAnalysis"] = self.sentence_analysis.to_dict()
        return data
