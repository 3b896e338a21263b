"""Exceptions raised by the corpus export run."""

from __future__ import annotations


class CorpusExportError(Exception):
    """Base class for export run failures."""


class FetchUnavailableError(CorpusExportError):
    """The directory service errored or returned nothing usable."""


class CardinalityMismatchError(CorpusExportError):
    """Generated views do not line up with the fetched record batch."""

    def __init__(self, expected: int, actual: int, view: str) -> None:
        self.expected = expected
        self.actual = actual
        self.view = view
        super().__init__(f"{view}: expected {expected} rows, got {actual}")


class PersistenceError(CorpusExportError):
    """One exported view could not be written."""

    def __init__(self, view: str, path: str, cause: BaseException) -> None:
        self.view = view
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {view} view to {path}: {cause}")
