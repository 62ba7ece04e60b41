"""Unit tests for all formatter modules.

WHY: Each formatter renders the same SpeechAnalysis into a file that
another tool reads: the JSON report feeds the feedback generator, the
text summary is read by people, and the CSV timeline is imported as
markers. A malformed file breaks whichever consumer reads it.

HOW: Tests run each formatter over analyses of the reference scenarios:
  - JSON report: schema validation, omitted fields, clarity breakdown
  - Plain text: section order, deductions, "not available" markers
  - Timeline CSV: columns, row kinds, time ordering

RULES:
- Schema validation uses schemas/analysis_report.schema.json.
- Analyses are built with analyze_transcript() from conftest scenarios.
"""

import csv
import io
import json
from pathlib import Path

import jsonschema
import pytest

from speech_metrics.core.analyzer import analyze_transcript
from speech_metrics.core.ir import Transcript, WordTiming
from speech_metrics.formatters import FORMATTERS
from speech_metrics.formatters.base import BaseFormatter
from speech_metrics.formatters.json_report import JsonReportFormatter, build_report
from speech_metrics.formatters.plain_text import PlainTextFormatter, format_clock
from speech_metrics.formatters.timeline_csv import CSV_COLUMNS, TimelineCsvFormatter

SCHEMA_PATH = (
    Path(__file__).resolve().parent.parent
    / "speech_metrics" / "schemas" / "analysis_report.schema.json"
)


def _load_schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


@pytest.fixture
def paused_analysis():
    """Filler at the start, one short and one long pause."""
    words = (
        WordTiming("Um,", 0.0, 0.3),
        WordTiming("hello", 0.3, 0.7),
        WordTiming("there.", 1.5, 1.9),     # 0.8s pause
        WordTiming("Bye", 4.9, 5.2),        # 3.0s pause
        WordTiming("now.", 5.2, 5.5),
    )
    transcript = Transcript(text="Um, hello there. Bye now.", confidence=0.9, words=words)
    return analyze_transcript(transcript)


class TestRegistry:

    def test_all_formatters_registered(self):
        assert set(FORMATTERS) == {"json_report", "plain_text", "timeline_csv"}

    def test_registry_holds_classes(self):
        for formatter_cls in FORMATTERS.values():
            formatter = formatter_cls()
            assert isinstance(formatter, BaseFormatter)
            assert formatter.suffix.startswith("-")
            assert formatter.name

    def test_suffixes_unique(self):
        suffixes = [cls().suffix for cls in FORMATTERS.values()]
        assert len(suffixes) == len(set(suffixes))


class TestJsonReport:

    def test_validates_against_schema(self, scenario_a, scenario_b, scenario_c, scenario_d):
        schema = _load_schema()
        for transcript in (scenario_a, scenario_b, scenario_c, scenario_d):
            output = JsonReportFormatter().format(analyze_transcript(transcript))[0]
            jsonschema.validate(instance=json.loads(output.content), schema=schema)

    def test_output_metadata(self, scenario_a):
        outputs = JsonReportFormatter().format(analyze_transcript(scenario_a))
        assert len(outputs) == 1
        assert outputs[0].suffix == "-metrics.json"
        assert outputs[0].media_type == "application/json"

    def test_clarity_breakdown_included(self, scenario_b):
        report = build_report(analyze_transcript(scenario_b))
        breakdown = report["clarityBreakdown"]
        assert breakdown["baseline"] == 85
        assert breakdown["score"] == report["clarityScore"] == 30
        assert sum(d["points"] for d in breakdown["deductions"]) == 55

    def test_no_timings_omits_reports(self):
        report = build_report(analyze_transcript(Transcript(text="Hello.", confidence=0.8)))
        assert "fillerWords" not in report
        assert "pauseAnalysis" not in report
        assert "sentenceAnalysis" not in report
        assert "wordsPerMinute" not in report
        jsonschema.validate(instance=report, schema=_load_schema())

    def test_pause_locations(self, paused_analysis):
        report = build_report(paused_analysis)
        pauses = report["pauseAnalysis"]
        assert pauses["totalPauses"] == 2
        assert pauses["longPauses"] == 1
        assert [p["startTime"] for p in pauses["pauseLocations"]] == pytest.approx([0.7, 1.9])


class TestPlainText:

    def test_section_order(self, paused_analysis):
        content = PlainTextFormatter().format(paused_analysis)[0].content
        headings = ["Clarity score:", "Clarity deductions", "Disfluencies:", "Pauses:", "Sentences:"]
        positions = [content.index(h) for h in headings]
        assert positions == sorted(positions)

    def test_summary_values(self, scenario_a):
        content = PlainTextFormatter().format(analyze_transcript(scenario_a))[0].content
        assert "Clarity score: 60/100" in content
        assert "Speaking rate: 200 wpm" in content
        assert "-15 filler_density: disfluencies are 12.5% of words" in content
        assert "-10 speaking_rate: speaking rate of 200 wpm" in content
        assert "0:00.9  repetition test test" in content

    def test_not_available_without_timings(self):
        analysis = analyze_transcript(Transcript(text="Hello.", confidence=0.9))
        content = PlainTextFormatter().format(analysis)[0].content
        assert "Speaking rate: not available" in content
        assert "Disfluencies: not available" in content
        assert "Pauses: not available" in content
        assert "Sentences: not available" in content
        assert "  none" in content

    def test_none_found_with_timings(self, scenario_c):
        content = PlainTextFormatter().format(analyze_transcript(scenario_c))[0].content
        assert "Disfluencies: none found" in content

    def test_no_trailing_whitespace(self, paused_analysis):
        content = PlainTextFormatter().format(paused_analysis)[0].content
        assert all(line == line.rstrip() for line in content.split("\n"))
        assert content.endswith("\n")

    @pytest.mark.parametrize("seconds, expected", [
        (0.0, "0:00.0"), (9.94, "0:09.9"), (75.25, "1:15.2"), (-1.0, "0:00.0"),
        (59.96, "1:00.0"), (119.99, "2:00.0"),
    ])
    def test_format_clock(self, seconds, expected):
        assert format_clock(seconds) == expected


class TestTimelineCsv:

    def _rows(self, analysis):
        output = TimelineCsvFormatter().format(analysis)[0]
        assert output.media_type == "text/csv"
        return list(csv.reader(io.StringIO(output.content)))

    def test_header(self, scenario_c):
        rows = self._rows(analyze_transcript(scenario_c))
        assert rows == [CSV_COLUMNS]

    def test_rows_sorted_by_time(self, paused_analysis):
        rows = self._rows(paused_analysis)[1:]
        assert [(r[1], r[2]) for r in rows] == [
            ("disfluency", "filler"),
            ("pause", "short"),
            ("pause", "long"),
        ]
        times = [float(r[0]) for r in rows]
        assert times == sorted(times)

    def test_row_fields(self, paused_analysis):
        filler, short, long = self._rows(paused_analysis)[1:]
        assert filler == ["0.000", "disfluency", "filler", "Um", ""]
        assert short == ["0.700", "pause", "short", "", "0.800"]
        assert long[4] == "3.000"
