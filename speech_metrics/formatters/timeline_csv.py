"""CSV event timeline formatter.

WHY: Reviewing a recording is easier with a list of moments to jump
to. A CSV of every flagged event opens in any spreadsheet and can be
imported as markers by audio editors.

HOW: Collects one row per disfluency mark and one per pause, sorts the
rows by time, and writes them with the csv module.

RULES:
- Columns: time_s, event, category, detail, duration_s
- event is "disfluency" or "pause"
- Disfluency rows: category is the mark category, detail the phrase,
  duration_s empty
- Pause rows: category "long" or "short", detail empty
- Rows are ordered by time; ties keep disfluencies before pauses
- Output suffix: "-timeline.csv"
"""

from __future__ import annotations

import csv
import io
from typing import List, Tuple

from speech_metrics import config
from speech_metrics.core.ir import SpeechAnalysis
from speech_metrics.formatters.base import BaseFormatter, FormatterOutput

CSV_COLUMNS = ["time_s", "event", "category", "detail", "duration_s"]


def _rows(analysis: SpeechAnalysis) -> List[Tuple[float, List[str]]]:
    rows: List[Tuple[float, List[str]]] = []
    if analysis.filler_words is not None:
        for mark in analysis.filler_words.words:
            rows.append((mark.timestamp_s, [
                "{:.3f}".format(mark.timestamp_s),
                "disfluency",
                mark.category.value,
                mark.phrase,
                "",
            ]))
    if analysis.pause_analysis is not None:
        for pause in analysis.pause_analysis.pauses:
            kind = "long" if pause.duration_s > config.LONG_PAUSE_THRESHOLD_S else "short"
            rows.append((pause.start_s, [
                "{:.3f}".format(pause.start_s),
                "pause",
                kind,
                "",
                "{:.3f}".format(pause.duration_s),
            ]))
    rows.sort(key=lambda r: r[0])
    return rows


class TimelineCsvFormatter(BaseFormatter):
    """Formatter that lists disfluencies and pauses as timed CSV rows."""

    @property
    def name(self) -> str:
        return "Event Timeline CSV"

    @property
    def suffix(self) -> str:
        return "-timeline.csv"

    def format(self, analysis: SpeechAnalysis) -> List[FormatterOutput]:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for _, row in _rows(analysis):
            writer.writerow(row)
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=buffer.getvalue(),
                media_type="text/csv",
            )
        ]
