"""Pydantic request/response schemas for the meeting corpus API."""

from __future__ import annotations

from pydantic import BaseModel


class TrainingExampleResponse(BaseModel):
    """Response body for the /api/corpus/generate endpoint."""

    id: int
    description: str
    tokens: list[str]
    labels: list[str]


class ExportFailure(BaseModel):
    """A view that could not be written."""

    view: str
    path: str
    error: str


class ExportResponse(BaseModel):
    """Response body for the /api/corpus/export endpoint."""

    num_meetings: int
    files: dict[str, str]
    failures: list[ExportFailure] = []
