"""Grid store holding the cell matrix of a Latin square session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True, slots=True)
class Cell:
    """Value of one cell plus the flag marking it as a given."""

    value: int = 0
    fixed: bool = False

    @classmethod
    def from_signed(cls, raw: int) -> "Cell":
        """Decode the file encoding: negative numbers are fixed givens."""

        raw = int(raw)
        if raw < 0:
            return cls(value=-raw, fixed=True)
        return cls(value=raw, fixed=False)

    def to_signed(self) -> int:
        return -self.value if self.fixed else self.value


class GridStore:
    """Square matrix of cells addressed with 1-based ``(row, col)`` pairs.

    The store does no rule checking. Callers validate indices and values
    before calling :meth:`set`; the rule engine is the only writer during a
    session.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"size must be positive, got {size!r}")
        self._size = int(size)
        self._cells: List[List[Cell]] = [[Cell() for _ in range(self._size)] for _ in range(self._size)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GridStore":
        """Build a store from signed row values (negative = fixed)."""

        size = len(rows)
        grid = cls(size)
        for r, row in enumerate(rows, start=1):
            if len(row) != size:
                raise ValueError(f"row {r} has {len(row)} values, expected {size}")
            for c, raw in enumerate(row, start=1):
                grid.set(r, c, raw)
        return grid

    @property
    def size(self) -> int:
        return self._size

    def cell(self, row: int, col: int) -> Cell:
        return self._cells[row - 1][col - 1]

    def get(self, row: int, col: int) -> int:
        """Return the signed value stored at ``(row, col)``."""

        return self._cells[row - 1][col - 1].to_signed()

    def set(self, row: int, col: int, value: int) -> None:
        self._cells[row - 1][col - 1] = Cell.from_signed(value)

    def is_fixed(self, row: int, col: int) -> bool:
        return self._cells[row - 1][col - 1].fixed

    def is_complete(self) -> bool:
        return all(cell.value != 0 for line in self._cells for cell in line)

    def empty_cells(self) -> int:
        return sum(1 for line in self._cells for cell in line if cell.value == 0)

    def row(self, row: int) -> List[int]:
        return [cell.to_signed() for cell in self._cells[row - 1]]

    def column(self, col: int) -> List[int]:
        return [line[col - 1].to_signed() for line in self._cells]

    def rows(self) -> List[List[int]]:
        return [[cell.to_signed() for cell in line] for line in self._cells]

    def copy(self) -> "GridStore":
        return GridStore.from_rows(self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridStore):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"GridStore(size={self._size}, rows={self.rows()!r})"


__all__ = ["Cell", "GridStore"]
