"""Command line entry point for playing a Latin square from a file."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, TextIO

from board.codec import output_path_for, read_grid
from contracts.errors import ConfigError, GridLoadError, InvalidData, InvalidSize, MissingFile, SaveError
from printer.pdf import export_pdf
from project_config import GameSettings, get_settings
from session.log import SessionJournal
from session.loop import GameSession

_LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_FILE = 1
EXIT_CONFIG = 2


def _load_message(exc: GridLoadError, max_size: int) -> str:
    if isinstance(exc, MissingFile):
        return f"Error! Unable to access file {exc.path}"
    if isinstance(exc, InvalidSize):
        return f"Error: Detected invalid size of latin square in the file...\nMaximum size is {max_size}"
    if isinstance(exc, InvalidData):
        return "Error: Invalid input detected in the Latin square data..."
    return f"Error: {exc}"


def _resolve_settings(args: argparse.Namespace) -> GameSettings:
    settings = get_settings()
    if args.max_size is not None:
        if args.max_size < 1:
            raise ConfigError(f"--max-size must be positive, got {args.max_size}")
        settings = replace(settings, max_size=args.max_size)
    return settings


def _stdin_lines(stdin: TextIO) -> Iterable[str]:
    return iter(stdin.readline, "")


def cmd_play(args: argparse.Namespace, *, stdin: TextIO, stdout: TextIO) -> int:
    if not args.file:
        stdout.write(f"Usage: {args.prog} <filename>\nError code: 1 => FileName not provided \n")
        return EXIT_NO_FILE

    try:
        settings = _resolve_settings(args)
    except ConfigError as exc:
        sys.stderr.write(f"Configuration error: {exc}\n")
        return EXIT_CONFIG

    try:
        grid = read_grid(args.file, max_size=settings.max_size)
    except GridLoadError as exc:
        _LOGGER.info("Load failed for %s: %s", args.file, exc)
        stdout.write(_load_message(exc, settings.max_size) + "\n")
        stdout.write(f"Error: Something went wrong while reading the file {args.file}\n")
        return EXIT_OK

    out_path = Path(args.out) if args.out else output_path_for(args.file, settings.output_prefix)

    journal = None
    log_dir = args.log_dir or (settings.log_dir if settings.log_enabled else None)
    if log_dir is not None:
        journal = SessionJournal(log_dir, max_bytes=settings.log_max_bytes)

    session = GameSession(
        grid,
        out_path,
        stdout=stdout,
        events=journal,
        source=args.file,
        session_id=journal.session_id if journal is not None else None,
    )
    summary = session.run(_stdin_lines(stdin))
    _LOGGER.info("Session %s ended: %s after %d moves", session.session_id, summary.outcome, summary.moves)

    if args.pdf:
        try:
            export_pdf(
                summary.grid,
                args.pdf,
                cell_cm=settings.pdf_cell_cm,
                font_scale=settings.pdf_font_scale,
                title=Path(args.file).name,
            )
        except SaveError as exc:
            stdout.write(f"Error : Unable to export board to {exc.path}!\n")
    return EXIT_OK


def _build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Play a Latin square puzzle loaded from a file")
    parser.add_argument("file", nargs="?", help="Grid file: size followed by size*size signed cell values")
    parser.add_argument(
        "--out",
        default=None,
        help="Save path. Defaults to the configured prefix plus the input file name.",
    )
    parser.add_argument(
        "--pdf",
        default=None,
        help="Also export the final board to this PDF file",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write the JSONL session journal under this directory",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Override the largest accepted grid size (default from config)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (default WARNING)",
    )
    return parser


def main(argv: List[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    parser = _build_parser(prog="latin-square")
    args = parser.parse_args(argv)
    args.prog = parser.prog
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return cmd_play(args, stdin=stdin or sys.stdin, stdout=stdout or sys.stdout)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
