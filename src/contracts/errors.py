"""Shared error types for the Latin square game."""

from __future__ import annotations


from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple


class LatinSquareError(Exception):
    """Base class for every error raised by the game."""


class ConfigError(LatinSquareError):
    """Raised when configuration values are missing or malformed."""


class GridLoadError(LatinSquareError):
    """Raised when a grid file cannot be turned into a playable grid."""

    code = "load-error"

    def __init__(self, path: str | Path | None, detail: str) -> None:
        self.path = None if path is None else str(path)
        self.detail = detail
        super().__init__(f"{self.code}:{detail}")


class MissingFile(GridLoadError):
    code = "missing-file"


class InvalidSize(GridLoadError):
    code = "invalid-size"


class InvalidData(GridLoadError):
    code = "invalid-data"


class MoveFormatError(LatinSquareError):
    """Raised when a command string is not of the form ``i,j=val``."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"wrong format of command: {raw!r}")


class SaveError(LatinSquareError):
    """Raised when the grid cannot be written to its output file."""

    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"unable to save {self.path}: {detail}")


class Rejection(str, Enum):
    """Reasons the rule engine refuses a move."""

    OUT_OF_RANGE = "OutOfRange"
    ILLEGAL_CLEAR = "IllegalClear"
    CELL_OCCUPIED = "CellOccupied"
    DUPLICATE_VALUE = "DuplicateValue"

    def message(self, size: int) -> str:
        """Return the user-facing reason for the rejection."""

        if self is Rejection.OUT_OF_RANGE:
            return f"Error: i,j or val are outside the allowed range [1..{size}]!"
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    Rejection.ILLEGAL_CLEAR: "Error: illegal to clear cell!",
    Rejection.CELL_OCCUPIED: "Error: cell is already occupied!",
    Rejection.DUPLICATE_VALUE: "Error: Illegal value insertion!",
}


@dataclass(frozen=True)
class Conflict:
    """Two cells on the same line holding the same absolute value."""

    axis: str
    value: int
    first: Tuple[int, int]
    second: Tuple[int, int]


__all__ = [
    "ConfigError",
    "Conflict",
    "GridLoadError",
    "InvalidData",
    "InvalidSize",
    "LatinSquareError",
    "MissingFile",
    "MoveFormatError",
    "Rejection",
    "SaveError",
]
