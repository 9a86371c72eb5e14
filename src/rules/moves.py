"""Move value object and the ``i,j=val`` command parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from contracts.errors import MoveFormatError

_COMMAND_RE = re.compile(r"\s*([+-]?\d+),\s*([+-]?\d+)=\s*([+-]?\d+)")


@dataclass(frozen=True)
class Move:
    """A 1-based ``(row, col, value)`` request; ``value == 0`` clears."""

    row: int
    col: int
    value: int

    @property
    def is_sentinel(self) -> bool:
        """``0,0=0`` asks to save and end the session."""

        return self.row == 0 and self.col == 0 and self.value == 0

    @property
    def is_clear(self) -> bool:
        return self.value == 0

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.row, self.col, self.value)

    def __str__(self) -> str:
        return f"{self.row},{self.col}={self.value}"


SENTINEL = Move(0, 0, 0)


def parse_move(raw: str) -> Move:
    """Parse a command such as ``"2,3=4"``.

    Anything after the third integer is ignored. Raises
    :class:`MoveFormatError` if the leading text is not three integers in the
    ``i,j=val`` shape.
    """

    match = _COMMAND_RE.match(raw)
    if match is None:
        raise MoveFormatError(raw)
    row, col, value = (int(group) for group in match.groups())
    return Move(row, col, value)


__all__ = ["Move", "SENTINEL", "parse_move"]
