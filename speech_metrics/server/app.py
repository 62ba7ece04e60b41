"""FastAPI application exposing the speech metrics engine over HTTP.

WHY: The coaching app's backend, batch jobs, and other tools need to
score transcripts without embedding Python. FastAPI provides request
validation and automatic OpenAPI documentation.

HOW: Every analysis endpoint accepts the same AnalysisRequest body,
converts it to a core Transcript through the ASR ingestion layer, and
runs the synchronous engine in-request (it does no I/O and finishes in
milliseconds, so there is no job queue).

RULES:
- All endpoints have OpenAPI descriptions and documented error responses
- Malformed time offsets -> 422; invalid lexicon -> 400; unknown format -> 404
- Error responses use a consistent ErrorResponse schema
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from speech_metrics import __version__, config
from speech_metrics.asr.models import AsrResult
from speech_metrics.core.analyzer import analyze_transcript
from speech_metrics.core.disfluency import Lexicon, build_lexicon
from speech_metrics.core.ir import SpeechAnalysis, Transcript
from speech_metrics.formatters import FORMATTERS
from speech_metrics.formatters.json_report import build_report
from speech_metrics.server.models import (
    AnalysisRequest,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    ScoreResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Speech Metrics API",
    description=(
        "Score completed ASR transcripts: speaking rate, categorized filler "
        "words, pause statistics, sentence pacing, and a 0-100 clarity score. "
        "Submit a transcript with word timings and receive the enriched analysis."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_ANALYSIS_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid lexicon"},
    422: {"model": ErrorResponse, "description": "Malformed transcript or time offsets"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_transcript(request: AnalysisRequest) -> Tuple[Transcript, Optional[Lexicon]]:
    """Convert the request body into a core Transcript and lexicon.

    Raises HTTPException 422 for malformed time offsets and 400 for an
    invalid lexicon.
    """
    payload = request.model_dump(by_alias=True, exclude={"lexicon"})
    try:
        transcript = AsrResult.from_dict(payload).to_transcript()
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    lexicon = None
    if request.lexicon is not None:
        try:
            lexicon = build_lexicon(request.lexicon)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    return transcript, lexicon


def _analyze(request: AnalysisRequest) -> SpeechAnalysis:
    transcript, lexicon = _to_transcript(request)
    analysis = analyze_transcript(transcript, lexicon)
    logger.info(
        "Analyzed transcript: %d words, clarity %d, %.1f ms",
        analysis.word_count,
        analysis.clarity_score,
        analysis.processing_time_ms,
    )
    return analysis


# ---------------------------------------------------------------------------
# Endpoints: Analyses
# ---------------------------------------------------------------------------


@app.post(
    "/analyses",
    response_model=Dict[str, Any],
    tags=["analyses"],
    summary="Analyze a transcript",
    description=(
        "Returns the enriched transcript: fillerWords, pauseAnalysis and "
        "sentenceAnalysis (each omitted when the input cannot support it), "
        "wordsPerMinute, clarityScore, and the clarityBreakdown."
    ),
    responses=_ANALYSIS_ERRORS,
)
async def create_analysis(request: AnalysisRequest) -> Dict[str, Any]:
    return build_report(_analyze(request))


@app.post(
    "/analyses/score",
    response_model=ScoreResponse,
    tags=["analyses"],
    summary="Score a transcript",
    description="Returns only the clarity score and the overall speaking rate.",
    responses=_ANALYSIS_ERRORS,
)
async def score_analysis(request: AnalysisRequest) -> ScoreResponse:
    analysis = _analyze(request)
    return ScoreResponse(
        clarity_score=analysis.clarity_score,
        speaking_rate=analysis.speaking_rate_wpm,
    )


@app.post(
    "/analyses/report/{format_key}",
    tags=["analyses"],
    summary="Render a report file",
    description=(
        "Analyze a transcript and return one report file in the requested "
        "format. See GET /formats for the available keys."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Unknown format"},
        **_ANALYSIS_ERRORS,
    },
)
async def render_report(format_key: str, request: AnalysisRequest) -> Response:
    if format_key not in FORMATTERS:
        available = ", ".join(sorted(FORMATTERS.keys()))
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available: {}".format(format_key, available),
        )

    formatter = FORMATTERS[format_key]()
    output = formatter.format(_analyze(request))[0]
    filename = "analysis{}".format(output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available report formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the speech-metrics-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
