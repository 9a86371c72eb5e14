"""Reader and writer for the plain-text grid file format.

The format is a sequence of whitespace separated integers: the grid size
followed by ``size * size`` signed cell values in row-major order. Saved
files put the size on the first line and one row per line, values joined by
single spaces.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from contracts.errors import InvalidData, InvalidSize, MissingFile, SaveError

from .store import GridStore

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 9


def _parse_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_grid(text: str, *, max_size: int = DEFAULT_MAX_SIZE, source: str | Path | None = None) -> GridStore:
    """Parse ``text`` into a :class:`GridStore`.

    Raises :class:`InvalidSize` when the leading size token is missing, not an
    integer or outside ``[1, max_size]`` and :class:`InvalidData` when fewer
    than ``size * size`` integer cell values follow. Tokens after the last
    cell are ignored.
    """

    tokens = text.split()
    size = _parse_int(tokens[0]) if tokens else None
    if size is None or size < 1 or size > max_size:
        found = tokens[0] if tokens else None
        raise InvalidSize(source, f"size must be an integer in [1, {max_size}], got {found!r}")

    expected = size * size
    values: List[int] = []
    for token in tokens[1 : expected + 1]:
        value = _parse_int(token)
        if value is None:
            raise InvalidData(source, f"cell {len(values) + 1} is not an integer: {token!r}")
        values.append(value)
    if len(values) < expected:
        raise InvalidData(source, f"expected {expected} cell values, found {len(values)}")

    if len(tokens) > expected + 1:
        _LOGGER.debug("Ignoring %d trailing tokens in %s", len(tokens) - expected - 1, source)

    rows = [values[r * size : (r + 1) * size] for r in range(size)]
    return GridStore.from_rows(rows)


def read_grid(path: str | Path, *, max_size: int = DEFAULT_MAX_SIZE) -> GridStore:
    """Load a grid file from ``path``."""

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError, PermissionError) as exc:
        raise MissingFile(file_path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise InvalidData(file_path, "file is not UTF-8 text") from exc
    grid = parse_grid(text, max_size=max_size, source=file_path)
    _LOGGER.info("Loaded %dx%d grid from %s", grid.size, grid.size, file_path)
    return grid


def format_grid(grid: GridStore) -> str:
    """Render ``grid`` in the save-file layout."""

    lines = [str(grid.size)]
    lines.extend(" ".join(str(value) for value in row) for row in grid.rows())
    return "\n".join(lines) + "\n"


def write_grid(grid: GridStore, path: str | Path) -> Path:
    """Write ``grid`` to ``path`` and return the path written."""

    file_path = Path(path)
    try:
        with file_path.open("w", encoding="utf-8") as handle:
            handle.write(format_grid(grid))
    except OSError as exc:
        raise SaveError(file_path, str(exc)) from exc
    _LOGGER.info("Saved %dx%d grid to %s", grid.size, grid.size, file_path)
    return file_path


def output_path_for(input_path: str | Path, prefix: str, out_dir: str | Path | None = None) -> Path:
    """Derive the save path: ``prefix`` + the input file name.

    The file lands next to the input unless ``out_dir`` is given.
    """

    source = Path(input_path)
    directory = source.parent if out_dir is None else Path(out_dir)
    return directory / f"{prefix}{source.name}"


__all__ = ["DEFAULT_MAX_SIZE", "format_grid", "output_path_for", "parse_grid", "read_grid", "write_grid"]
