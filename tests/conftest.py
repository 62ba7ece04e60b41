"""Shared test fixtures for the speech_metrics test suite.

WHY: Most test modules need time-aligned transcripts with exactly known
gaps, spans, and word counts. Building them by hand in every test is
noisy and error-prone, so the builders and the reference scenarios
live here.

HOW: make_words is a factory fixture that lays words out back to back
(optionally with a fixed gap). The scenario fixtures build the four
reference transcripts used across the engine and API tests.

RULES:
- Timings are computed from integer multiples so gaps are exact
- Scenario transcripts are never mutated by tests
"""

from typing import Any, Dict, List, Optional, Sequence

import pytest

from speech_metrics.core.ir import Transcript, WordTiming


def build_words(
    tokens: Sequence[str],
    start: float = 0.0,
    word_s: float = 0.3,
    gap_s: float = 0.0,
    confidence: Optional[float] = None,
) -> List[WordTiming]:
    """Lay tokens out back to back: each lasts word_s, separated by gap_s."""
    words = []
    step = word_s + gap_s
    for i, token in enumerate(tokens):
        begin = start + i * step
        words.append(WordTiming(
            word=token,
            start_s=begin,
            end_s=begin + word_s,
            confidence=confidence,
        ))
    return words


@pytest.fixture
def make_words():
    """Factory fixture around build_words."""
    return build_words


@pytest.fixture
def scenario_a():
    """'This is a test test of the system.' 8 words, 0.3s each, no gaps (2.4s)."""
    text = "This is a test test of the system."
    return Transcript(text=text, confidence=0.95, words=tuple(build_words(text.split())))


@pytest.fixture
def scenario_b():
    """Heavy filler/hedge density with low recognition confidence."""
    text = "Um, so, I think, um, this is, you know, good."
    return Transcript(text=text, confidence=0.65, words=tuple(build_words(text.split())))


@pytest.fixture
def scenario_c():
    """50 distinct words, no terminal punctuation, 0.4s each (20s total)."""
    tokens = ["word{}".format(i) for i in range(50)]
    return Transcript(
        text=" ".join(tokens),
        confidence=0.92,
        words=tuple(build_words(tokens, word_s=0.4)),
    )


@pytest.fixture
def scenario_d():
    """Two five-word sentences: the first at 100 wpm, the second at 250 wpm."""
    first = build_words(["We", "start", "off", "very", "slowly."], word_s=0.6)
    second = build_words(["Then", "we", "speed", "right", "up."], start=3.0, word_s=0.24)
    return Transcript(
        text="We start off very slowly. Then we speed right up.",
        confidence=0.95,
        words=tuple(first + second),
    )


@pytest.fixture
def sample_asr_response() -> Dict[str, Any]:
    """Recognizer response with string time offsets and two results."""
    return {
        "results": [
            {
                "alternatives": [
                    {
                        "transcript": "Um, so this is a test test.",
                        "confidence": 0.9,
                        "words": [
                            {"word": "Um,", "startTime": "0s", "endTime": "0.300s", "confidence": 0.8},
                            {"word": "so", "startTime": "0.300s", "endTime": "0.600s"},
                            {"word": "this", "startTime": "0.600s", "endTime": "0.900s"},
                            {"word": "is", "startTime": "0.900s", "endTime": "1.200s"},
                            {"word": "a", "startTime": "1.200s", "endTime": "1.500s"},
                            {"word": "test", "startTime": "1.500s", "endTime": "1.800s"},
                            {"word": "test.", "startTime": "1.800s", "endTime": "2.100s"},
                        ],
                    }
                ]
            },
            {
                "alternatives": [
                    {
                        "transcript": " Thanks for listening.",
                        "confidence": 0.8,
                        "words": [
                            {"word": "Thanks", "startTime": "3.100s", "endTime": "3.400s"},
                            {"word": "for", "startTime": "3.400s", "endTime": "3.600s"},
                            {"word": "listening.", "startTime": {"seconds": "3", "nanos": 600000000},
                             "endTime": {"seconds": "4"}},
                        ],
                    }
                ]
            },
        ]
    }
