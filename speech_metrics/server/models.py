"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: The request mirrors the flat ASR result shape (camelCase aliases
on the wire, snake_case in Python). Time offsets are accepted in every
form the ingestion layer understands and normalized there.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Wire names are camelCase (startTime, clarityScore, ...)
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

TimeOffset = Union[float, str, Dict[str, Any]]


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class WordTimingIn(BaseModel):
    """One word timing as produced by the recognizer."""

    word: str = Field(description="Recognized word, punctuation attached as returned.")
    start_time: TimeOffset = Field(
        alias="startTime",
        description="Start offset: seconds as a number, a '1.5s' string, or {seconds, nanos}.",
    )
    end_time: TimeOffset = Field(
        alias="endTime",
        description="End offset, same forms as startTime.",
    )
    confidence: Optional[float] = Field(
        default=None,
        description="Per-word recognition confidence (0-1).",
    )

    model_config = {"populate_by_name": True}


class AnalysisRequest(BaseModel):
    """A completed ASR result to analyze.

    RULES:
    - words may be empty; the analysis then degrades gracefully
    - lexicon, when given, replaces the built-in filler/hedge lists
    """

    transcript: str = Field(description="Full transcript text.")
    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Overall recognition confidence (0-1).",
    )
    words: List[WordTimingIn] = Field(
        default_factory=list,
        description="Word timings ordered by start time.",
    )
    lexicon: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Optional {'filler': [...], 'hedge': [...]} phrase lists.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "transcript": "Um, so this is a test test of the system.",
                "confidence": 0.91,
                "words": [
                    {"word": "Um,", "startTime": "0s", "endTime": "0.300s"},
                    {"word": "so", "startTime": "0.300s", "endTime": "0.500s"},
                ],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ScoreResponse(BaseModel):
    """Headline metrics only."""

    clarity_score: int = Field(
        alias="clarityScore",
        description="Composite clarity score (0-100).",
    )
    speaking_rate: Optional[int] = Field(
        default=None,
        alias="speakingRate",
        description="Overall words per minute; null without usable word timings.",
    )

    model_config = {"populate_by_name": True}


class FormatInfo(BaseModel):
    """Description of an available report format."""

    key: str = Field(description="Format identifier used in API paths.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-metrics.json').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
