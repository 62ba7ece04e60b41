"""Full metrics pipeline: transcript in, enriched analysis out.

WHY: Callers (CLI, HTTP API, tests) want one call that runs every
analyzer and returns the enriched transcript, plus the two headline
functions (speaking rate and clarity score) as stable entry points.

HOW: The word timeline is normalized once. Disfluency, pause, and
sentence analysis run independently over it; the speaking rate and
clarity score are computed last from all of their outputs.

RULES:
- Side-effect free apart from DEBUG logging
- Never raises for a well-typed Transcript, including one without words
- Sub-reports are None when their inputs are insufficient
- processing_time_ms measures the call only; it never feeds the score
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from speech_metrics.core.clarity import ClaritySignals, explain_clarity
from speech_metrics.core.disfluency import Lexicon, detect_disfluencies
from speech_metrics.core.ir import SpeechAnalysis, Transcript
from speech_metrics.core.pauses import analyze_pauses
from speech_metrics.core.rate import calculate_speaking_rate as _rate_from_words
from speech_metrics.core.sentences import segment_sentences
from speech_metrics.core.timeline import normalize_words, speech_span

logger = logging.getLogger(__name__)


def analyze_transcript(
    transcript: Transcript,
    lexicon: Optional[Lexicon] = None,
) -> SpeechAnalysis:
    """Run every analyzer over one transcript.

    Args:
        transcript: A completed ASR result.
        lexicon: Filler/hedge phrases; defaults to the configured lexicon.

    Returns:
        The enriched SpeechAnalysis.
    """
    started = time.perf_counter()

    timeline = normalize_words(transcript.words)
    fillers = detect_disfluencies(transcript.text, timeline, lexicon)
    pauses = analyze_pauses(timeline)
    sentences = segment_sentences(transcript.text, timeline)

    signals = ClaritySignals.from_reports(transcript, fillers, pauses, sentences)
    clarity = explain_clarity(signals)

    span = speech_span(timeline)
    analysis = SpeechAnalysis(
        transcript=transcript,
        word_count=len(timeline),
        duration_s=span[1] - span[0] if span else 0.0,
        clarity=clarity,
        filler_words=fillers,
        pause_analysis=pauses,
        sentence_analysis=sentences,
        speaking_rate_wpm=signals.speaking_rate_wpm,
    )
    analysis.processing_time_ms = (time.perf_counter() - started) * 1000.0

    logger.debug(
        "Analyzed %d words: clarity=%d rate=%s disfluencies=%s pauses=%s sentences=%s",
        analysis.word_count,
        clarity.score,
        analysis.speaking_rate_wpm,
        fillers.count if fillers else None,
        pauses.total_pauses if pauses else None,
        len(sentences.sentences) if sentences else None,
    )
    return analysis


def calculate_speaking_rate(transcript: Transcript) -> Optional[int]:
    """Overall words per minute, or None without usable word timings."""
    return _rate_from_words(transcript.words)


def calculate_clarity_score(
    transcript: Transcript,
    lexicon: Optional[Lexicon] = None,
) -> int:
    """Clarity score in [0, 100] for one transcript."""
    return analyze_transcript(transcript, lexicon).clarity_score
