"""JSON metrics report formatter.

WHY: The feedback generator, the metrics visualizer, and session
persistence all read the enriched transcript as JSON. A schema-checked
report guarantees they always receive the documented shape.

HOW: SpeechAnalysis.to_dict() produces the camelCase wire shape; this
formatter adds the clarity breakdown, validates the result against
schemas/analysis_report.schema.json with jsonschema, and serializes it.

RULES:
- Absent reports are omitted, never written as zeros or nulls
- Output is validated before returning; a violation raises
  jsonschema.ValidationError
- Output suffix: "-metrics.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from speech_metrics.core.ir import SpeechAnalysis
from speech_metrics.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "analysis_report.schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_report(analysis: SpeechAnalysis) -> dict[str, Any]:
    """The validated report dict for one analysis."""
    report = analysis.to_dict()
    report["clarityBreakdown"] = analysis.clarity.to_dict()
    jsonschema.validate(instance=report, schema=_get_schema())
    return report


class JsonReportFormatter(BaseFormatter):
    """Formatter that writes the full metrics report as JSON."""

    @property
    def name(self) -> str:
        return "JSON Report"

    @property
    def suffix(self) -> str:
        return "-metrics.json"

    def format(self, analysis: SpeechAnalysis) -> list[FormatterOutput]:
        content = json.dumps(build_report(analysis), indent=2, ensure_ascii=False)
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content + "\n",
                media_type="application/json",
            )
        ]
