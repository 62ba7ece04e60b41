"""Configuration constants, default lexicon, and .env loading.

WHY: Centralizes all tunable values so they are easy to find, update,
and override. Pause thresholds, the filler/hedge word lists, and the
API server defaults are plain data structures, not buried in logic,
so they can be localized or tuned without touching the analyzers.

HOW: python-dotenv loads the .env file on import. Constants are module
level values with environment overrides. load_lexicon() reads a
custom lexicon from a JSON file and validates it with jsonschema.

RULES:
- DEFAULT_LEXICON_PHRASES maps category name -> phrases (lower case)
- Filler and hedge lists never share a phrase
- SPEECH_METRICS_LEXICON, when set, points at a lexicon JSON file that
  replaces the built-in lists for calls that pass no lexicon
- Invalid lexicon files raise ValueError with a readable message
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Pause thresholds (seconds)
# ---------------------------------------------------------------------------

SHORT_PAUSE_THRESHOLD_S = float(os.getenv("SPEECH_METRICS_SHORT_PAUSE_S", "0.5"))
"""Gaps strictly longer than this count as pauses."""

LONG_PAUSE_THRESHOLD_S = float(os.getenv("SPEECH_METRICS_LONG_PAUSE_S", "2.0"))
"""Pauses strictly longer than this count as long pauses."""

# ---------------------------------------------------------------------------
# Disfluency lexicon
# ---------------------------------------------------------------------------

DEFAULT_LEXICON_PHRASES: dict[str, list[str]] = {
    "filler": ["um", "uh", "er", "ehm", "mm", "hmm"],
    "hedge": [
        "like",
        "so",
        "you know",
        "i mean",
        "actually",
        "basically",
        "just",
        "kind of",
        "sort of",
    ],
}

LEXICON_PATH = os.getenv("SPEECH_METRICS_LEXICON", "").strip() or None

_LEXICON_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "lexicon.schema.json"

# ---------------------------------------------------------------------------
# HTTP API defaults
# ---------------------------------------------------------------------------

API_HOST = os.getenv("SPEECH_METRICS_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SPEECH_METRICS_PORT", "8000"))


def _lexicon_schema() -> dict[str, Any]:
    with open(_LEXICON_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def load_lexicon(path: str | Path):
    """Load and validate a lexicon JSON file.

    WHY: Teams coaching in another language, or with a different notion
    of what counts as a hedge, need their own word lists.

    HOW: Parse the JSON, validate it against schemas/lexicon.schema.json,
    then hand the mapping to build_lexicon() for the semantic checks.

    RULES:
    - File shape: {"filler": [...], "hedge": [...]}, both keys optional
    - Unreadable JSON, schema violations, and overlapping lists raise ValueError

    Returns:
        A validated lexicon (DisfluencyCategory -> frozenset of phrases).
    """
    from speech_metrics.core.disfluency import build_lexicon

    lexicon_path = Path(path)
    try:
        data = json.loads(lexicon_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError("Cannot read lexicon file {}: {}".format(lexicon_path, exc)) from exc

    try:
        jsonschema.validate(instance=data, schema=_lexicon_schema())
    except jsonschema.ValidationError as exc:
        raise ValueError("Invalid lexicon file {}: {}".format(lexicon_path, exc.message)) from exc

    return build_lexicon(data)


@lru_cache(maxsize=1)
def default_lexicon():
    """The lexicon used when a caller passes none.

    Loaded from SPEECH_METRICS_LEXICON when set, otherwise built from
    DEFAULT_LEXICON_PHRASES.
    """
    from speech_metrics.core.disfluency import DEFAULT_LEXICON

    if LEXICON_PATH:
        return load_lexicon(LEXICON_PATH)
    return DEFAULT_LEXICON
