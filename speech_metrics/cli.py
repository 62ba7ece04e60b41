"""Command-line interface for the speech metrics engine.

WHY: Users and batch jobs need a simple way to score ASR results from
the terminal. The CLI wires together ingestion, analysis, pluggable
formatter output, and file saving behind a single command.

HOW: Uses argparse to accept one or more ASR result JSON files, an
optional lexicon file, output format selection, and output directory.
Each file is analyzed independently. Status messages go to stderr;
output files are saved next to the source (or to --output-dir).

RULES:
- Positional arguments: one or more ASR result JSON files
- --formats: comma-separated formatter keys (default: all registered)
- --lexicon: JSON lexicon replacing the built-in filler/hedge lists
- --summary: print "<file>: clarity N/100, R wpm" per file to stdout
- Output naming: {stem}{suffix}; with --lexicon the lexicon file stem is
  added before the extension (session-metrics-lexicon.json); numeric
  suffix for conflicts (session-metrics-2.json)
- Status output goes to stderr (not stdout)
- Any input error stops the run with "Error: ..." and exit code 1
"""

from __future__ import annotations

import argparse
import itertools
import os
import sys
from pathlib import Path
from typing import List, Optional

from speech_metrics.asr.models import load_asr_file
from speech_metrics.config import load_lexicon
from speech_metrics.core.analyzer import analyze_transcript
from speech_metrics.core.ir import SpeechAnalysis
from speech_metrics.formatters import FORMATTERS
from speech_metrics.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
    lexicon_tag: Optional[str] = None,
) -> Path:
    """Pick a report path that does not overwrite an earlier report.

    WHY: A recording is often re-scored with a different lexicon to
    compare word lists. Tagging the name with the lexicon keeps those
    reports apart; the counter keeps repeated runs apart.

    RULES:
    - Name: {stem}{label}[-{lexicon_tag}]{ext}, where the formatter
      suffix splits into label and extension (-metrics + .json)
    - Taken names get -2, -3, ... after the tag (session-metrics-lexicon-2.json)
    """
    label, ext = os.path.splitext(suffix)
    if lexicon_tag:
        label = "{}-{}".format(label, lexicon_tag)

    candidate = output_dir / "{}{}{}".format(stem, label, ext)
    for counter in itertools.count(2):
        if not candidate.exists():
            return candidate
        candidate = output_dir / "{}{}-{}{}".format(stem, label, counter, ext)


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
    lexicon_tag: Optional[str] = None,
) -> Path:
    """Write one formatter output as UTF-8 and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir, lexicon_tag)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_format_keys(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _summary_line(name: str, analysis: SpeechAnalysis) -> str:
    rate = analysis.speaking_rate_wpm
    return "{}: clarity {}/100, {}".format(
        name,
        analysis.clarity_score,
        "{} wpm".format(rate) if rate is not None else "rate n/a",
    )


def run(args: argparse.Namespace) -> List[Path]:
    """Analyze every input file and save the selected reports.

    Returns:
        Paths of all files written.
    """
    format_keys = _parse_format_keys(args.formats)

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            _fail("Output directory does not exist: {}".format(output_dir))

    lexicon = None
    lexicon_tag = None
    if args.lexicon:
        lexicon_tag = Path(args.lexicon).stem
        try:
            lexicon = load_lexicon(args.lexicon)
        except ValueError as e:
            _fail(str(e))
        _status("Lexicon: {}".format(args.lexicon))

    saved_files: List[Path] = []
    for input_file in args.input_files:
        input_path = Path(input_file).resolve()
        if not input_path.is_file():
            _fail("File not found: {}".format(input_path))

        _status("Analyzing {}...".format(input_path.name))
        try:
            transcript = load_asr_file(input_path).to_transcript()
        except ValueError as e:
            _fail(str(e))

        analysis = analyze_transcript(transcript, lexicon)
        _status("  {} words, clarity {}/100".format(analysis.word_count, analysis.clarity_score))

        target_dir = output_dir or input_path.parent
        for key in format_keys:
            formatter = FORMATTERS[key]()
            for output in formatter.format(analysis):
                saved_path = _save_output(output, input_path.stem, target_dir, lexicon_tag)
                saved_files.append(saved_path)
                _status("  Saved: {}".format(saved_path.name))

        if args.summary:
            print(_summary_line(input_path.name, analysis))

    _status("Done! Saved {} file(s)".format(len(saved_files)))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="speech-metrics",
        description="Score completed ASR transcripts: speaking rate, filler words, "
                    "pauses, sentence pacing, and a 0-100 clarity score.",
    )

    parser.add_argument(
        "input_files",
        nargs="+",
        help="ASR result JSON file(s) to analyze.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as each input file).",
    )

    parser.add_argument(
        "--lexicon",
        default=None,
        help="Path to a lexicon JSON file ({\"filler\": [...], \"hedge\": [...]}).",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the clarity score and speaking rate of each file to stdout.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
