"""Write the dataset views to fixed file names under an export directory."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from src.corpus.assembler import Dataset
from src.corpus.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_BASENAME = "meetingData"

SIMPLE_VIEW = "simple"
TAGGER_VIEW = "textTagger"
JSON_VIEW = "json"
COMPLEX_VIEW = "complex"


@dataclass
class PersistReport:
    """Outcome of one persist call: written files and per-view failures."""

    written: dict[str, Path] = field(default_factory=dict)
    failures: list[PersistenceError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def export_paths(destination: str | Path, basename: str = DEFAULT_BASENAME) -> dict[str, Path]:
    """Return the output path of each view."""
    directory = Path(destination)
    return {
        SIMPLE_VIEW: directory / f"{basename}.simple.csv",
        TAGGER_VIEW: directory / f"{basename}.textTagger.csv",
        JSON_VIEW: directory / f"{basename}.json",
        COMPLEX_VIEW: directory / f"{basename}.complex.csv",
    }


def _encode_sequences(frame: pd.DataFrame) -> pd.DataFrame:
    """Render list cells as JSON arrays so CSV cells stay machine-readable."""
    encoded = frame.copy()
    for column in encoded.columns:
        if encoded[column].map(lambda v: isinstance(v, list)).any():
            encoded[column] = encoded[column].map(
                lambda v: json.dumps(v, ensure_ascii=False) if isinstance(v, list) else v
            )
    return encoded


def _write_csv(frame: pd.DataFrame) -> Callable[[Path], None]:
    def write(path: Path) -> None:
        _encode_sequences(frame).to_csv(path, index=False)

    return write


def _write_text(text: str) -> Callable[[Path], None]:
    def write(path: Path) -> None:
        path.write_text(text, encoding="utf-8")

    return write


def _replace(path: Path, write: Callable[[Path], None]) -> None:
    """Remove any existing file at *path*, then write the new content."""
    path.unlink(missing_ok=True)
    write(path)


def persist_dataset(
    dataset: Dataset,
    destination: str | Path,
    basename: str = DEFAULT_BASENAME,
) -> PersistReport:
    """Write every view of *dataset*, overwriting previous exports.

    A failure writing one view is logged and recorded in the report; the
    remaining views are still written.

    Args:
        dataset: Assembled views.
        destination: Directory for the output files (created if missing).
        basename: File-name stem shared by all views.

    Returns:
        A :class:`PersistReport`.
    """
    paths = export_paths(destination, basename)
    writers: dict[str, tuple[Callable[[Path], None], int]] = {
        SIMPLE_VIEW: (_write_csv(dataset.simple), len(dataset.simple)),
        TAGGER_VIEW: (_write_csv(dataset.tagger), len(dataset.tagger)),
        JSON_VIEW: (_write_text(dataset.raw_json), len(dataset.raw)),
        COMPLEX_VIEW: (_write_csv(dataset.raw), len(dataset.raw)),
    }

    report = PersistReport()
    try:
        Path(destination).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        for view, path in paths.items():
            report.failures.append(PersistenceError(view, str(path), e))
        logger.error("Cannot create export directory %s: %s", destination, e)
        return report

    for view, (write, rows) in writers.items():
        path = paths[view]
        try:
            _replace(path, write)
        except Exception as e:
            logger.exception("Failed to write %s view to %s", view, path)
            report.failures.append(PersistenceError(view, str(path), e))
            continue
        report.written[view] = path
        logger.info("Wrote %s view (%d rows) to %s", view, rows, path)

    return report
