"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

from contracts.errors import ConfigError
from contracts.schema_validator import SchemaValidationError, validate_config


_CONFIG_FILENAME = "config.toml"
_CONFIG_ENV = "LATIN_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "game": {"max_size": 9, "output_prefix": "out-"},
    "log": {"enabled": False, "dir": "logs/sessions", "max_bytes": 10 * 1024 * 1024},
    "pdf": {"cell_cm": 1.5, "font_scale": 0.55},
}


@dataclass(frozen=True)
class GameSettings:
    """Resolved settings after defaults, TOML and environment are merged."""

    max_size: int
    output_prefix: str
    log_enabled: bool
    log_dir: Path
    log_max_bytes: int
    pdf_cell_cm: float
    pdf_font_scale: float


def _config_path() -> Path:
    override = os.environ.get(_CONFIG_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


def _merge(base: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in extra.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary.

    A missing ``config.toml`` falls back to :data:`DEFAULTS`; a present but
    malformed one raises :class:`ConfigError`, as does one that cannot be read.
    """

    path = _config_path()
    if not path.exists():
        return copy.deepcopy(DEFAULTS)
    try:
        with path.open("rb") as fh:
            loaded = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration file '{path}' is not valid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Configuration file '{path}' cannot be read: {exc}") from exc

    try:
        validate_config(loaded)
    except SchemaValidationError as exc:
        raise ConfigError(f"Configuration file '{path}' is invalid: {exc.detail}") from exc
    return _merge(DEFAULTS, loaded)


def reload() -> None:
    """Clear the cached configuration."""

    get_config.cache_clear()


def get_section(path: str, default: Any = None) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _coerce_max_size(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"LATIN_MAX_SIZE must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigError(f"LATIN_MAX_SIZE must be positive, got {value}")
    return value


def get_settings(env: Mapping[str, str] | None = None) -> GameSettings:
    """Return :class:`GameSettings` with environment overrides applied."""

    env_map = os.environ if env is None else env
    game = get_section("game")
    log = get_section("log")
    pdf = get_section("pdf")

    max_size = int(game["max_size"])
    output_prefix = str(game["output_prefix"])
    log_enabled = bool(log["enabled"])
    log_dir = Path(log["dir"])

    if env_map.get("LATIN_MAX_SIZE"):
        max_size = _coerce_max_size(env_map["LATIN_MAX_SIZE"])
    if "LATIN_OUTPUT_PREFIX" in env_map:
        output_prefix = env_map["LATIN_OUTPUT_PREFIX"]
    override = _coerce_bool(env_map.get("LATIN_LOG_ENABLED"))
    if override is not None:
        log_enabled = override
    if env_map.get("LATIN_LOG_DIR"):
        log_dir = Path(env_map["LATIN_LOG_DIR"])

    return GameSettings(
        max_size=max_size,
        output_prefix=output_prefix,
        log_enabled=log_enabled,
        log_dir=log_dir,
        log_max_bytes=int(log["max_bytes"]),
        pdf_cell_cm=float(pdf["cell_cm"]),
        pdf_font_scale=float(pdf["font_scale"]),
    )


__all__ = ["DEFAULTS", "GameSettings", "get_config", "get_section", "get_settings", "reload"]
