"""ASR result dataclasses and JSON ingestion.

WHY: The recognizer returns loosely typed JSON: times arrive as
numbers, as "1.500s" strings, or as {"seconds", "nanos"} objects, and
results may come flat or nested under results[].alternatives[]. The
engine only wants a clean Transcript with float seconds. Typed
dataclasses make the accepted shapes explicit and reject broken input
early with a readable message.

HOW: Each dataclass maps to one JSON object. Factory methods
(from_dict) parse raw dicts; to_transcript() builds the core IR.

RULES:
- Times are normalized to float seconds on ingestion
- Accepted time forms: int/float, "<n>s" string, {"seconds", "nanos"}
- Flat shape: {"transcript", "confidence", "words"}
- Recognizer shape: {"results": [{"alternatives": [{...}]}]}; the first
  alternative of each result is used, texts joined by one space, words
  appended in order, confidence averaged over results
- Missing word confidence stays None; missing overall confidence is 0.0
- Malformed input raises ValueError
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from speech_metrics.core.ir import Transcript, WordTiming


def parse_time_offset(value: Any) -> float:
    """Normalize an ASR time offset to float seconds.

    RULES:
    - 1.5 and 1 are taken as seconds
    - "1.500s" and "1.5" strings are parsed (trailing "s" optional)
    - {"seconds": "1", "nanos": 500000000} is a protobuf Duration
    - bool, None, NaN, infinities, and anything unparseable raise ValueError
    """
    seconds = _parse_seconds(value)
    if not math.isfinite(seconds):
        raise ValueError("Invalid time offset: {!r}".format(value))
    return seconds


def _parse_seconds(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError("Invalid time offset: {!r}".format(value))
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            raise ValueError("Invalid time offset: {!r}".format(value)) from None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("s"):
            text = text[:-1]
        try:
            return float(text)
        except ValueError:
            raise ValueError("Invalid time offset: {!r}".format(value)) from None
    if isinstance(value, dict):
        try:
            seconds = float(value.get("seconds", 0) or 0)
            nanos = float(value.get("nanos", 0) or 0)
        except (TypeError, ValueError, OverflowError):
            raise ValueError("Invalid time offset: {!r}".format(value)) from None
        return seconds + nanos / 1e9
    raise ValueError("Invalid time offset: {!r}".format(value))


def _first_present(data: dict, *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise ValueError("Word entry is missing '{}': {!r}".format(keys[0], data))


@dataclass
class AsrWord:
    """A single word entry from the recognizer response.

    RULES:
    - word: the recognized text, punctuation attached as returned
    - start_s / end_s: float seconds
    - confidence: None when the recognizer did not report one
    """

    word: str
    start_s: float
    end_s: float
    confidence: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AsrWord:
        """Parse one word entry (camelCase or snake_case keys)."""
        if not isinstance(data, dict):
            raise ValueError("Word entry must be an object, got {!r}".format(data))
        confidence = data.get("confidence")
        return cls(
            word=str(data.get("word") or ""),
            start_s=parse_time_offset(_first_present(data, "startTime", "start_time")),
            end_s=parse_time_offset(_first_present(data, "endTime", "end_time")),
            confidence=float(confidence) if confidence is not None else None,
        )

    def to_word_timing(self) -> WordTiming:
        return WordTiming(
            word=self.word,
            start_s=self.start_s,
            end_s=self.end_s,
            confidence=self.confidence,
        )


@dataclass
class AsrResult:
    """A completed recognition result, ready to become a Transcript.

    WHY: Bridges the recognizer's JSON and the engine's IR, and is the
    one place that knows about both response shapes.
    """

    transcript: str
    confidence: float
    words: list[AsrWord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> AsrResult:
        """Parse either the flat or the nested recognizer shape.

        Raises:
            ValueError: If the payload has no transcript text or contains
                malformed word entries.
        """
        if not isinstance(data, dict):
            raise ValueError("ASR result must be a JSON object")
        if "results" in data:
            return cls._from_results(data["results"])
        if "alternatives" in data:
            return cls._from_results([data])
        return cls._from_alternative(data)

    @classmethod
    def _from_alternative(cls, data: dict) -> AsrResult:
        if not isinstance(data.get("transcript"), str):
            raise ValueError("ASR result is missing 'transcript' text")
        raw_words = data.get("words") or data.get("wordTimeOffsets") or []
        if not isinstance(raw_words, list):
            raise ValueError("'words' must be a list")
        return cls(
            transcript=data["transcript"],
            confidence=float(data.get("confidence") or 0.0),
            words=[AsrWord.from_dict(w) for w in raw_words],
        )

    @classmethod
    def _from_results(cls, results: Any) -> AsrResult:
        if not isinstance(results, list) or not results:
            raise ValueError("ASR response contains no results")

        parts: list[AsrResult] = []
        for result in results:
            alternatives = result.get("alternatives") if isinstance(result, dict) else None
            if not alternatives:
                continue
            parts.append(cls._from_alternative(alternatives[0]))

        if not parts:
            raise ValueError("ASR response contains no alternatives")

        words: list[AsrWord] = []
        for part in parts:
            words.extend(part.words)
        return cls(
            transcript=" ".join(p.transcript.strip() for p in parts if p.transcript.strip()),
            confidence=sum(p.confidence for p in parts) / len(parts),
            words=words,
        )

    def to_transcript(self) -> Transcript:
        return Transcript(
            text=self.transcript,
            confidence=self.confidence,
            words=tuple(w.to_word_timing() for w in self.words),
        )


def load_asr_file(path: str | Path) -> AsrResult:
    """Read and parse an ASR result JSON file.

    Raises:
        ValueError: If the file cannot be read, is not JSON, or does not
            contain a usable result.
    """
    asr_path = Path(path)
    try:
        data = json.loads(asr_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError("Cannot read ASR result {}: {}".format(asr_path, exc)) from exc
    return AsrResult.from_dict(data)
