"""Plain text metrics summary formatter.

WHY: Coaches and users reviewing a session want the numbers at a
glance, without reading JSON: the score, the pace, what was flagged,
and why points were taken off.

HOW: Builds a fixed sequence of labelled sections. Each optional
report gets its own section; a report that is absent is shown as
"not available" so readers can tell it apart from a zero.

RULES:
- Section order: summary, clarity deductions, disfluencies, pauses, sentences
- Times are printed as m:ss.s
- No trailing whitespace on any line
- Output suffix: "-metrics.txt"
"""

from __future__ import annotations

from typing import List

from speech_metrics.core.ir import DisfluencyCategory, SpeechAnalysis
from speech_metrics.formatters.base import BaseFormatter, FormatterOutput

_NOT_AVAILABLE = "not available"


def format_clock(seconds: float) -> str:
    """Format seconds as m:ss.s, e.g. 75.25 -> '1:15.2'."""
    minutes, rest = divmod(round(max(0.0, seconds), 1), 60.0)
    return "{}:{:04.1f}".format(int(minutes), rest)


def _summary_lines(analysis: SpeechAnalysis) -> List[str]:
    rate = analysis.speaking_rate_wpm
    return [
        "Clarity score: {}/100".format(analysis.clarity_score),
        "Speaking rate: {}".format("{} wpm".format(rate) if rate is not None else _NOT_AVAILABLE),
        "Words: {}".format(analysis.word_count),
        "Duration: {}".format(format_clock(analysis.duration_s)),
        "Recognition confidence: {:.0%}".format(analysis.transcript.confidence),
    ]


def _clarity_lines(analysis: SpeechAnalysis) -> List[str]:
    lines = ["Clarity deductions (baseline {}):".format(analysis.clarity.baseline)]
    if not analysis.clarity.deductions:
        lines.append("  none")
    for deduction in analysis.clarity.deductions:
        lines.append("  -{} {}: {}".format(deduction.points, deduction.rule, deduction.reason))
    return lines


def _disfluency_lines(analysis: SpeechAnalysis) -> List[str]:
    report = analysis.filler_words
    if report is None:
        return ["Disfluencies: {}".format(
            _NOT_AVAILABLE if analysis.word_count == 0 else "none found"
        )]
    counts = ", ".join(
        "{} {}".format(report.count_for(c), c.value) for c in DisfluencyCategory
    )
    lines = ["Disfluencies: {} ({})".format(report.count, counts)]
    for mark in report.words:
        lines.append("  {}  {:<10} {}".format(
            format_clock(mark.timestamp_s), mark.category.value, mark.phrase,
        ))
    return lines


def _pause_lines(analysis: SpeechAnalysis) -> List[str]:
    report = analysis.pause_analysis
    if report is None:
        return ["Pauses: {}".format(_NOT_AVAILABLE)]
    lines = ["Pauses: {} ({} long, average {:.2f}s)".format(
        report.total_pauses, report.long_pauses, report.avg_pause_duration_s,
    )]
    for pause in report.pauses:
        lines.append("  {}  {:.2f}s".format(format_clock(pause.start_s), pause.duration_s))
    return lines


def _sentence_lines(analysis: SpeechAnalysis) -> List[str]:
    report = analysis.sentence_analysis
    if report is None:
        return ["Sentences: {}".format(_NOT_AVAILABLE)]
    lines = ["Sentences: {} (average {:.1f} words)".format(
        len(report.sentences), report.average_sentence_length_words,
    )]
    for sentence in report.sentences:
        pace = "{} wpm".format(sentence.words_per_minute) if sentence.words_per_minute else "-"
        lines.append("  {}-{}  {:>8}  {}".format(
            format_clock(sentence.start_s), format_clock(sentence.end_s), pace, sentence.text,
        ))
    return lines


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces a human-readable metrics summary."""

    @property
    def name(self) -> str:
        return "Plain Text Summary"

    @property
    def suffix(self) -> str:
        return "-metrics.txt"

    def format(self, analysis: SpeechAnalysis) -> List[FormatterOutput]:
        sections = [
            _summary_lines(analysis),
            _clarity_lines(analysis),
            _disfluency_lines(analysis),
            _pause_lines(analysis),
            _sentence_lines(analysis),
        ]
        content = "\n\n".join("\n".join(line.rstrip() for line in s) for s in sections)
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content + "\n",
                media_type="text/plain",
            )
        ]
