"""Grid storage and the plain-text grid file format."""

from .codec import format_grid, output_path_for, parse_grid, read_grid, write_grid
from .store import Cell, GridStore

__all__ = [
    "Cell",
    "GridStore",
    "format_grid",
    "output_path_for",
    "parse_grid",
    "read_grid",
    "write_grid",
]
