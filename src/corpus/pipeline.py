"""End-to-end export run: fetch -> assemble -> persist."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from src.corpus.assembler import Dataset, assemble_dataset
from src.corpus.errors import CardinalityMismatchError, FetchUnavailableError
from src.corpus.fetcher import fetch_meetings
from src.corpus.models import MeetingRecord
from src.corpus.persistence import DEFAULT_BASENAME, PersistReport, persist_dataset

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """What one successful fetch produced and where it went."""

    dataset: Dataset
    report: PersistReport


def export_records(
    records: list[MeetingRecord],
    destination: str | Path,
    basename: str = DEFAULT_BASENAME,
) -> ExportResult | None:
    """Assemble and persist an already-fetched batch.

    Returns:
        The result, or None when assembly aborted (nothing is written).
    """
    try:
        dataset = assemble_dataset(records)
    except CardinalityMismatchError as e:
        logger.error("Dataset assembly aborted: %s", e)
        return None

    report = persist_dataset(dataset, destination, basename)
    if not report.ok:
        logger.warning(
            "%d of 4 views failed to persist: %s",
            len(report.failures),
            ", ".join(f.view for f in report.failures),
        )
    return ExportResult(dataset=dataset, report=report)


async def export_meetings(
    server_url: str,
    destination: str | Path,
    basename: str = DEFAULT_BASENAME,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> ExportResult | None:
    """Fetch the whole directory and export it.

    Returns:
        The result, or None when the fetch was unavailable or assembly
        aborted. No files are written in either case.
    """
    try:
        records = await fetch_meetings(server_url, client=client, timeout=timeout)
    except FetchUnavailableError as e:
        logger.error("Export aborted, meeting data unavailable: %s", e)
        return None

    return export_records(records, destination, basename)


def run_export(
    server_url: str,
    destination: str | Path,
    basename: str = DEFAULT_BASENAME,
    timeout: float | None = None,
) -> ExportResult | None:
    """Blocking wrapper around :func:`export_meetings` for scripts."""
    return asyncio.run(export_meetings(server_url, destination, basename, timeout=timeout))
