"""Core data model and the speech metrics engine.

WHY: The core package is the algorithmic heart of the project: the IR
dataclasses and the pure analyzers that turn a time-aligned transcript
into coaching metrics. Everything else (ingestion, formatters, CLI,
HTTP API) is a thin layer around it.

HOW: ir.py defines the data structures, timeline.py normalizes and
aligns word timings, disfluency.py / pauses.py / sentences.py /
rate.py compute the individual metrics, clarity.py combines them into
a score, and analyzer.py runs the whole pipeline.

RULES:
- Pure, synchronous, deterministic; no I/O
- The input Transcript is never mutated
- Missing timing data degrades individual reports to None, never raises
"""
