"""Error taxonomy and schema contracts for the Latin square game."""

from __future__ import annotations

from .errors import (
    ConfigError,
    Conflict,
    GridLoadError,
    InvalidData,
    InvalidSize,
    LatinSquareError,
    MissingFile,
    MoveFormatError,
    Rejection,
    SaveError,
)
from .schema_validator import SchemaValidationError, validate_config, validate_event

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
    "SchemaValidationError",
    "validate_config",
    "validate_event",
]
