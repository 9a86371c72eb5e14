"""Move validation and win detection for Latin square sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from board.store import GridStore
from contracts.errors import Conflict, Rejection

from .moves import Move

_LOGGER = logging.getLogger(__name__)

Position = Tuple[int, int]


class Outcome(str, Enum):
    """Session state after a move has been handled."""

    CONTINUE = "continue"
    COMPLETED = "completed"
    TERMINATED = "terminated"


class Status(str, Enum):
    INSERTED = "inserted"
    CLEARED = "cleared"
    REJECTED = "rejected"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class MoveResult:
    """Classification of a single move request.

    ``conflicts`` lists the cells that made a ``DuplicateValue`` rejection;
    it is empty for every other result.
    """

    move: Move
    outcome: Outcome
    status: Status
    rejection: Optional[Rejection] = None
    conflicts: Tuple[Position, ...] = field(default_factory=tuple)

    @property
    def accepted(self) -> bool:
        return self.status in (Status.INSERTED, Status.CLEARED)

    def message(self, size: int) -> str:
        if self.rejection is not None:
            return self.rejection.message(size)
        if self.status is Status.INSERTED:
            return "Value Inserted!"
        if self.status is Status.CLEARED:
            return "Value Cleared!"
        return "Saving and ending the game"


class RuleEngine:
    """Single authority deciding whether a move is legal, applying it and
    reporting whether the grid has been completed.

    The engine owns no state besides the grid it mutates.
    """

    def __init__(self, grid: GridStore) -> None:
        self.grid = grid

    def in_range(self, move: Move) -> bool:
        size = self.grid.size
        return 1 <= move.row <= size and 1 <= move.col <= size and 0 <= move.value <= size

    def duplicates_of(self, move: Move) -> List[Position]:
        """Cells on the move's row or column already holding ``move.value``.

        Both axes are scanned in full; fixed cells count by their absolute
        value.
        """

        grid = self.grid
        hits: List[Position] = []
        for c, current in enumerate(grid.row(move.row), start=1):
            if current != 0 and abs(current) == move.value:
                hits.append((move.row, c))
        for r, current in enumerate(grid.column(move.col), start=1):
            if current != 0 and abs(current) == move.value:
                hits.append((r, move.col))
        return hits

    def _reject(self, move: Move, reason: Rejection, conflicts: Tuple[Position, ...] = ()) -> MoveResult:
        _LOGGER.debug("Rejected %s: %s", move, reason.value)
        return MoveResult(
            move=move,
            outcome=Outcome.CONTINUE,
            status=Status.REJECTED,
            rejection=reason,
            conflicts=conflicts,
        )

    def apply(self, move: Move) -> MoveResult:
        """Validate ``move`` and commit it when legal.

        Rejections leave the grid untouched. The sentinel ``0,0=0`` is
        recognised before any range check and yields ``TERMINATED``.
        """

        if move.is_sentinel:
            return MoveResult(move=move, outcome=Outcome.TERMINATED, status=Status.TERMINATED)

        if not self.in_range(move):
            return self._reject(move, Rejection.OUT_OF_RANGE)

        grid = self.grid
        cell = grid.cell(move.row, move.col)
        if cell.fixed:
            if move.is_clear:
                return self._reject(move, Rejection.ILLEGAL_CLEAR)
            return self._reject(move, Rejection.CELL_OCCUPIED)
        if cell.value != 0 and not move.is_clear:
            return self._reject(move, Rejection.CELL_OCCUPIED)

        if not move.is_clear:
            conflicts = self.duplicates_of(move)
            if conflicts:
                return self._reject(move, Rejection.DUPLICATE_VALUE, tuple(conflicts))

        grid.set(move.row, move.col, move.value)
        status = Status.CLEARED if move.is_clear else Status.INSERTED
        outcome = Outcome.COMPLETED if grid.is_complete() else Outcome.CONTINUE
        _LOGGER.debug("Applied %s: %s (%s)", move, status.value, outcome.value)
        return MoveResult(move=move, outcome=outcome, status=status)

    @staticmethod
    def find_conflicts(grid: GridStore) -> List[Conflict]:
        """Return every pair of equal non-zero values sharing a row or column."""

        conflicts: List[Conflict] = []
        size = grid.size
        for axis in ("row", "column"):
            for line in range(1, size + 1):
                values = grid.row(line) if axis == "row" else grid.column(line)
                seen: dict[int, Position] = {}
                for offset, raw in enumerate(values, start=1):
                    if raw == 0:
                        continue
                    position = (line, offset) if axis == "row" else (offset, line)
                    value = abs(raw)
                    if value in seen:
                        conflicts.append(Conflict(axis=axis, value=value, first=seen[value], second=position))
                    else:
                        seen[value] = position
        return conflicts


__all__ = ["MoveResult", "Outcome", "Position", "RuleEngine", "Status"]
