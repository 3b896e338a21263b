"""Corpus endpoints: generate one training example, run a full export."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, HTTPException

from src.api.models import ExportFailure, ExportResponse, TrainingExampleResponse
from src.config import settings
from src.corpus.errors import FetchUnavailableError
from src.corpus.fetcher import fetch_meetings
from src.corpus.generator import generate_example
from src.corpus.parsers import parse_meeting
from src.corpus.pipeline import export_records

router = APIRouter()


@router.post("/api/corpus/generate", response_model=TrainingExampleResponse)
async def generate(meeting: Annotated[dict[str, Any], Body()]) -> TrainingExampleResponse:
    """Turn one meeting object (server or mirror JSON) into a training example."""
    try:
        record = parse_meeting(meeting)
    except (ValueError, TypeError) as exc:
        raise HTTPException(status_code=422, detail=f"Invalid meeting: {exc}") from exc

    example = generate_example(record)
    return TrainingExampleResponse(
        id=record.id,
        description=example.description,
        tokens=example.tokens,
        labels=example.labels,
    )


@router.post("/api/corpus/export", response_model=ExportResponse)
async def export() -> ExportResponse:
    """Fetch the whole directory and overwrite the configured export files.

    Returns 503 when the directory service is unavailable; nothing is written
    in that case.
    """
    try:
        records = await fetch_meetings(settings.meeting_server_url, timeout=settings.fetch_timeout)
    except FetchUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    result = export_records(records, settings.export_dir, settings.export_basename)
    if result is None:
        raise HTTPException(status_code=500, detail="Dataset assembly failed")

    return ExportResponse(
        num_meetings=len(result.dataset),
        files={view: str(path) for view, path in result.report.written.items()},
        failures=[
            ExportFailure(view=f.view, path=f.path, error=str(f.cause))
            for f in result.report.failures
        ],
    )
