"""Abstract base formatter and output container.

WHY: Every output format consumes the same SpeechAnalysis but produces
different file content. This base class enforces a consistent interface
so the CLI and HTTP layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; single-file formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-metrics.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from speech_metrics.core.ir import SpeechAnalysis


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-metrics.json"`` → ``"session-metrics.json"``.
        content: The file content as a string.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'JSON Report'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """Suffix of the file this formatter writes."""

    @abstractmethod
    def format(self, analysis: SpeechAnalysis) -> list[FormatterOutput]:
        """Render the analysis into one or more output files.

        Args:
            analysis: The enriched transcript with every derived metric.

        Returns:
            List of FormatterOutput objects.
        """
