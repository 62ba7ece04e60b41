"""ASR result ingestion.

WHY: Recognition happens elsewhere; this package only turns a completed
result (as JSON) into the core Transcript.

RULES:
- No network calls live here
- All time offsets are normalized to float seconds
"""

from speech_metrics.asr.models import AsrResult, AsrWord, load_asr_file, parse_time_offset

__all__ = ["AsrResult", "AsrWord", "load_asr_file", "parse_time_offset"]
