"""Output formatter registry, the pluggable report hub.

WHY: The CLI and HTTP layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json_report"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API paths)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from speech_metrics.formatters.json_report import JsonReportFormatter
from speech_metrics.formatters.plain_text import PlainTextFormatter
from speech_metrics.formatters.timeline_csv import TimelineCsvFormatter

if TYPE_CHECKING:
    from speech_metrics.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json_report": JsonReportFormatter,
    "plain_text": PlainTextFormatter,
    "timeline_csv": TimelineCsvFormatter,
}
