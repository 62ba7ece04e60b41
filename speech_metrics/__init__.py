"""Speech Metrics: coaching metrics from time-aligned transcripts.

WHY: A speech coach needs more than the words that were said: how fast,
how many fillers and hedges, where the pauses fell, how evenly the
sentences were paced, and one headline clarity score. This package
derives all of those from a completed ASR result.

HOW: Three-stage pipeline: ingest (asr package), analyze (core engine),
report (pluggable formatters). Each stage is independently testable. The
CLI and the HTTP API are thin wrappers around the same pipeline.

RULES:
- The engine is pure and synchronous: same transcript, same metrics
- Missing word timings degrade individual metrics, never the whole call
- All formatters consume the same SpeechAnalysis
"""

__version__ = "0.1.0"
