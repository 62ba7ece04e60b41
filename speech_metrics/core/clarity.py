"""Composite 0-100 clarity score built from named deduction rules.

WHY: Coaching feedback needs one headline number, but users (and the
people tuning the numbers) also need to know where it came from. Each
penalty is therefore its own named rule that can be tested and
reported on its own, rather than a chain of in-place subtractions.

HOW: ClaritySignals gathers every input the rules read (word count,
disfluency counts, pause statistics, speech duration, speaking rate,
recognition confidence, sentence statistics). Each DeductionRule maps
the signals to (points, reason). All rules are evaluated against the
same baseline, their points are summed, and the result is clamped.

RULES:
- Baseline is 85; deductions are additive, never compounding
- Each rule is capped by its own highest tier
- Rules whose signal is unavailable deduct nothing
- Filler/hedge/repetition rules need a filler report and word timings
- Disfluency density counts every mark, including repetitions and
  matches that could not be aligned to a word
- Pause rules need a pause report; sentence rules need a sentence report
- score = max(0, min(100, round(baseline - total)))
- Pure and deterministic: no state is carried between calls
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from speech_metrics.core.ir import (
    ClarityBreakdown,
    Deduction,
    DisfluencyCategory,
    FillerWordReport,
    PauseReport,
    SentenceReport,
    Transcript,
)
from speech_metrics.core.rate import calculate_speaking_rate, round_half_up
from speech_metrics.core.timeline import normalize_words, speech_span

BASELINE_SCORE = 85

# (exclusive lower bound, points); first matching tier wins
FILLER_DENSITY_TIERS = ((15.0, 25), (10.0, 15), (5.0, 10), (2.0, 5))
HEDGE_DENSITY_TIERS = ((8.0, 10), (5.0, 5))
REPETITION_TIERS = ((3, 10), (1, 5))
LONG_PAUSE_TIERS = ((5, 15), (2, 8))
AVG_PAUSE_TIERS = ((3.0, 12), (2.0, 8))
SENTENCE_LENGTH_TIERS = ((30.0, 10), (20.0, 5))
PACING_RATIO_TIERS = ((2.0, 10), (1.5, 5))

RUSHING_MIN_DURATION_S = 30.0
RUSHING_MAX_PAUSES_PER_MINUTE = 2.0
RUSHING_POINTS = 10

FAST_RATE_TIERS = ((200, 20), (180, 10))
SLOW_RATE_TIERS = ((100, 15), (120, 5))

LOW_CONFIDENCE_TIERS = ((0.70, 10), (0.85, 5))

RuleResult = Tuple[int, str]


@dataclass
class ClaritySignals:
    """Every input the clarity rules read, gathered once per transcript."""

    total_words: int
    confidence: float
    speech_duration_s: float
    filler_report: Optional[FillerWordReport] = None
    pause_report: Optional[PauseReport] = None
    sentence_report: Optional[SentenceReport] = None
    speaking_rate_wpm: Optional[int] = None

    @classmethod
    def from_reports(
        cls,
        transcript: Transcript,
        fillers: Optional[FillerWordReport] = None,
        pauses: Optional[PauseReport] = None,
        sentences: Optional[SentenceReport] = None,
    ) -> ClaritySignals:
        timeline = normalize_words(transcript.words)
        span = speech_span(timeline)
        duration = span[1] - span[0] if span else 0.0
        return cls(
            total_words=len(timeline),
            confidence=transcript.confidence,
            speech_duration_s=duration,
            filler_report=fillers,
            pause_report=pauses,
            sentence_report=sentences,
            speaking_rate_wpm=calculate_speaking_rate(timeline),
        )

    @property
    def has_disfluency_data(self) -> bool:
        return self.filler_report is not None and self.total_words > 0

    def category_percentage(self, *categories: DisfluencyCategory) -> float:
        """Marks in the given categories as a percentage of all words."""
        if not self.has_disfluency_data:
            return 0.0
        hits = sum(self.filler_report.count_for(c) for c in categories)
        return hits / self.total_words * 100


@dataclass(frozen=True)
class DeductionRule:
    """A named, independently evaluated clarity penalty."""

    name: str
    description: str
    evaluate: Callable[[ClaritySignals], RuleResult]


def _above(value: float, tiers: Sequence[Tuple[float, int]]) -> int:
    for threshold, points in tiers:
        if value > threshold:
            return points
    return 0


def _below(value: float, tiers: Sequence[Tuple[float, int]]) -> int:
    for threshold, points in tiers:
        if value < threshold:
            return points
    return 0


def _filler_density(signals: ClaritySignals) -> RuleResult:
    if not signals.has_disfluency_data:
        return 0, ""
    pct = signals.filler_report.count / signals.total_words * 100
    return _above(pct, FILLER_DENSITY_TIERS), "disfluencies are {:.1f}% of words".format(pct)


def _hedge_density(signals: ClaritySignals) -> RuleResult:
    if not signals.has_disfluency_data:
        return 0, ""
    pct = signals.category_percentage(DisfluencyCategory.HEDGE)
    return _above(pct, HEDGE_DENSITY_TIERS), "hedge words are {:.1f}% of words".format(pct)


def _repetitions(signals: ClaritySignals) -> RuleResult:
    if not signals.has_disfluency_data:
        return 0, ""
    count = signals.filler_report.count_for(DisfluencyCategory.REPETITION)
    return _above(count, REPETITION_TIERS), "{} repeated words".format(count)


def _long_pauses(signals: ClaritySignals) -> RuleResult:
    if signals.pause_report is None:
        return 0, ""
    count = signals.pause_report.long_pauses
    return _above(count, LONG_PAUSE_TIERS), "{} long pauses".format(count)


def _average_pause(signals: ClaritySignals) -> RuleResult:
    if signals.pause_report is None:
        return 0, ""
    avg = signals.pause_report.avg_pause_duration_s
    return _above(avg, AVG_PAUSE_TIERS), "average pause of {:.1f}s".format(avg)


def _pause_rate(signals: ClaritySignals) -> RuleResult:
    if signals.pause_report is None:
        return 0, ""
    duration = signals.speech_duration_s
    if duration <= RUSHING_MIN_DURATION_S:
        return 0, ""
    per_minute = signals.pause_report.total_pauses / (duration / 60.0)
    if per_minute < RUSHING_MAX_PAUSES_PER_MINUTE:
        return RUSHING_POINTS, "only {:.1f} pauses per minute".format(per_minute)
    return 0, ""


def _speaking_rate(signals: ClaritySignals) -> RuleResult:
    wpm = signals.speaking_rate_wpm
    if not wpm:
        return 0, ""
    points = _above(wpm, FAST_RATE_TIERS) or _below(wpm, SLOW_RATE_TIERS)
    return points, "speaking rate of {} wpm".format(wpm)


def _confidence(signals: ClaritySignals) -> RuleResult:
    conf = signals.confidence
    return _below(conf, LOW_CONFIDENCE_TIERS), "recognition confidence of {:.2f}".format(conf)


def _sentence_length(signals: ClaritySignals) -> RuleResult:
    if signals.sentence_report is None:
        return 0, ""
    avg = signals.sentence_report.average_sentence_length_words
    return _above(avg, SENTENCE_LENGTH_TIERS), "average sentence of {:.1f} words".format(avg)


def _pacing_variance(signals: ClaritySignals) -> RuleResult:
    report = signals.sentence_report
    if report is None or len(report.sentences) < 2:
        return 0, ""
    rates = [s.words_per_minute for s in report.sentences if s.words_per_minute]
    if len(rates) < 2:
        return 0, ""
    fastest, slowest = max(rates), min(rates)
    ratio = fastest / slowest
    return _above(ratio, PACING_RATIO_TIERS), "sentence pace varies from {} to {} wpm".format(
        slowest, fastest
    )


CLARITY_RULES: Tuple[DeductionRule, ...] = (
    DeductionRule("filler_density", "Every disfluency mark as a share of all words", _filler_density),
    DeductionRule("hedge_density", "Hedge words as a share of all words", _hedge_density),
    DeductionRule("repetitions", "Immediate word repetitions", _repetitions),
    DeductionRule("long_pauses", "Number of pauses longer than the long-pause threshold", _long_pauses),
    DeductionRule("average_pause", "Average pause duration", _average_pause),
    DeductionRule("pause_rate", "Too few pauses in a long recording (rushing)", _pause_rate),
    DeductionRule("speaking_rate", "Overall words per minute outside the comfortable range", _speaking_rate),
    DeductionRule("confidence", "Low overall recognition confidence", _confidence),
    DeductionRule("sentence_length", "Average sentence length in words", _sentence_length),
    DeductionRule("pacing_variance", "Ratio between the fastest and slowest sentence", _pacing_variance),
)


def explain_clarity(
    signals: ClaritySignals,
    rules: Sequence[DeductionRule] = CLARITY_RULES,
) -> ClarityBreakdown:
    """Evaluate every rule against the baseline and report each deduction."""
    deductions: List[Deduction] = []
    for rule in rules:
        points, reason = rule.evaluate(signals)
        if points:
            deductions.append(Deduction(rule=rule.name, points=points, reason=reason))

    total = sum(d.points for d in deductions)
    score = max(0, min(100, round_half_up(BASELINE_SCORE - total)))
    return ClarityBreakdown(baseline=BASELINE_SCORE, deductions=deductions, score=score)


def score_clarity(
    transcript: Transcript,
    fillers: Optional[FillerWordReport] = None,
    pauses: Optional[PauseReport] = None,
    sentences: Optional[SentenceReport] = None,
) -> int:
    """Clarity score in [0, 100] from a transcript and its reports."""
    signals = ClaritySignals.from_reports(transcript, fillers, pauses, sentences)
    return explain_clarity(signals).score
