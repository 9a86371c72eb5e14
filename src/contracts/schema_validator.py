"""JSON Schema checks for configuration blocks and session journal events."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"

CONFIG_SCHEMA = "config.schema.json"
SESSION_EVENT_SCHEMA = "session_event.schema.json"


class SchemaValidationError(RuntimeError):
    """Exception raised when a payload fails validation."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


_schema_cache: Dict[str, Dict[str, Any]] = {}
_validator_cache: Dict[str, Any] = {}


def load_schema(name: str) -> Dict[str, Any]:
    """Load a schema from the bundled ``schemas`` directory."""

    if name in _schema_cache:
        return _schema_cache[name]

    path = _SCHEMA_ROOT / name
    try:
        schema = json.loads(path.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", name) from exc

    _schema_cache[name] = schema
    return schema


def _validator(name: str) -> Any:
    cached = _validator_cache.get(name)
    if cached is not None:
        return cached

    schema = load_schema(name)
    Validator = jsonschema.validators.validator_for(schema)
    Validator.check_schema(schema)
    validator = Validator(schema)
    _validator_cache[name] = validator
    return validator


def _json_path(error: jsonschema.ValidationError) -> str:
    parts = ["$"]
    for item in error.absolute_path:
        parts.append(f"[{item}]" if isinstance(item, int) else f".{item}")
    return "".join(parts)


def validate(payload: Mapping[str, Any], schema_name: str) -> None:
    """Validate ``payload`` against ``schema_name``.

    The first error in the deterministic ``best_match`` order is reported as
    ``<json path>: <message>``.
    """

    validator = _validator(schema_name)
    error = jsonschema.exceptions.best_match(validator.iter_errors(dict(payload)))
    if error is not None:
        raise SchemaValidationError("schema-violation", f"{_json_path(error)}: {error.message}")


def validate_config(config: Mapping[str, Any]) -> None:
    validate(config, CONFIG_SCHEMA)


def validate_event(event: Mapping[str, Any]) -> None:
    validate(event, SESSION_EVENT_SCHEMA)


__all__ = [
    "CONFIG_SCHEMA",
    "SESSION_EVENT_SCHEMA",
    "SchemaValidationError",
    "load_schema",
    "validate",
    "validate_config",
    "validate_event",
]
