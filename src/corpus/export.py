"""Export the meeting directory as ML training data.

Entry point
-----------
Run as a module::

    python -m src.corpus.export --dir data/training --show

Writes ``meetingData.simple.csv``, ``meetingData.textTagger.csv``,
``meetingData.json`` and ``meetingData.complex.csv`` into the export
directory, replacing any previous export. Defaults come from ``src.config``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from src.config import settings
from src.corpus.pipeline import ExportResult, run_export


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.corpus.export",
        description="Fetch every meeting and write training-data exports.",
    )
    parser.add_argument(
        "--dir",
        default=settings.export_dir,
        help=f"Destination directory (default: {settings.export_dir!r}).",
    )
    parser.add_argument(
        "--server",
        default=settings.meeting_server_url,
        help="Meeting directory entry point URL.",
    )
    parser.add_argument(
        "--basename",
        default=settings.export_basename,
        help=f"File-name stem for the exports (default: {settings.export_basename!r}).",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Print the simple and raw frames after writing.",
    )
    return parser


def _print_result(result: ExportResult, show: bool) -> None:
    for view, path in result.report.written.items():
        print(f"  {view:<11} -> {path}")
    for failure in result.report.failures:
        print(f"  {failure.view:<11} !! {failure.cause}", file=sys.stderr)
    if show:
        print(result.dataset.raw)
        print(result.dataset.simple)


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"Exporting meetings from {args.server} to {args.dir!r} …")
    result = run_export(args.server, args.dir, args.basename, timeout=settings.fetch_timeout)
    if result is None:
        print("ERROR: Export aborted, no files written.", file=sys.stderr)
        return 1

    print(f"\nExported {len(result.dataset)} meetings.")
    _print_result(result, args.show)
    return 0 if result.report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
