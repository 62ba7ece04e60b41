"""Unit tests for pause extraction and pause statistics.

WHY: Pause counts feed three clarity rules. An off-by-epsilon threshold
or a pause timestamped at the wrong word end changes both the score
and what the UI highlights.

HOW: Tests build word sequences with exact gaps and check the strict
threshold comparisons, the pause start time, the aggregate fields, and
the None result for too-short input.
"""

import pytest

from speech_metrics.core.ir import WordTiming
from speech_metrics.core.pauses import analyze_pauses


def _pair(gap):
    return [WordTiming("one", 0.0, 1.0), WordTiming("two", 1.0 + gap, 1.5 + gap)]


class TestTooShortInput:

    def test_none(self):
        assert analyze_pauses(None) is None

    def test_empty(self):
        assert analyze_pauses([]) is None

    def test_single_word(self):
        assert analyze_pauses([WordTiming("solo", 0.0, 0.5)]) is None


class TestThresholds:
    """Both thresholds are exclusive."""

    def test_gap_at_threshold_is_not_a_pause(self):
        report = analyze_pauses(_pair(0.5))
        assert report.total_pauses == 0
        assert report.pauses == []
        assert report.avg_pause_duration_s == 0.0

    def test_gap_just_over_threshold_is_a_pause(self):
        report = analyze_pauses(_pair(0.51))
        assert report.total_pauses == 1
        assert report.pauses[0].duration_s == pytest.approx(0.51)

    def test_long_pause_threshold_is_exclusive(self):
        report = analyze_pauses(_pair(2.0))
        assert report.total_pauses == 1
        assert report.long_pauses == 0

    def test_long_pause(self):
        report = analyze_pauses(_pair(2.5))
        assert report.long_pauses == 1

    def test_custom_thresholds(self):
        report = analyze_pauses(_pair(0.3), short_threshold_s=0.2, long_threshold_s=0.25)
        assert report.total_pauses == 1
        assert report.long_pauses == 1

    def test_overlapping_words_are_not_pauses(self):
        words = [WordTiming("one", 0.0, 1.0), WordTiming("two", 0.8, 1.4)]
        report = analyze_pauses(words)
        assert report.total_pauses == 0


class TestPauseReport:

    def test_pause_starts_at_end_of_earlier_word(self):
        report = analyze_pauses(_pair(1.0))
        assert report.pauses[0].start_s == pytest.approx(1.0)

    def test_aggregates(self, make_words):
        words = make_words(["a", "b"], word_s=0.5) + [
            WordTiming("c", 2.0, 2.5),   # 1.0s after b
            WordTiming("d", 5.5, 6.0),   # 3.0s after c
            WordTiming("e", 6.1, 6.4),   # 0.1s, not a pause
        ]
        report = analyze_pauses(words)
        assert report.total_pauses == 2
        assert report.total_pauses == len(report.pauses)
        assert report.long_pauses == 1
        assert report.avg_pause_duration_s == pytest.approx(2.0)
        assert [p.start_s for p in report.pauses] == pytest.approx([1.0, 2.5])

    def test_unsorted_input_is_ordered_first(self):
        words = [WordTiming("two", 2.0, 2.5), WordTiming("one", 0.0, 1.0)]
        report = analyze_pauses(words)
        assert report.total_pauses == 1
        assert report.pauses[0].duration_s == pytest.approx(1.0)

    def test_back_to_back_words_have_no_pauses(self, scenario_a):
        report = analyze_pauses(scenario_a.words)
        assert report.total_pauses == 0
        assert report.long_pauses == 0

    def test_to_dict_shape(self):
        data = analyze_pauses(_pair(1.0)).to_dict()
        assert data["totalPauses"] == 1
        assert data["longPauses"] == 0
        assert data["avgPauseDuration"] == pytest.approx(1.0)
        assert data["pauseLocations"][0]["startTime"] == pytest.approx(1.0)
        assert data["pauseLocations"][0]["duration"] == pytest.approx(1.0)
