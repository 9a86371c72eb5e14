from __future__ import annotations

import pytest

import project_config

_ENV_KEYS = (
    "LATIN_CONFIG",
    "LATIN_MAX_SIZE",
    "LATIN_OUTPUT_PREFIX",
    "LATIN_LOG_ENABLED",
    "LATIN_LOG_DIR",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    project_config.reload()
    yield
    project_config.reload()


@pytest.fixture
def write_grid_file(tmp_path):
    def _write(text: str, name: str = "puzzle.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
