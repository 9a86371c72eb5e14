"""Per-session JSONL journal.

Every session writes to its own file ``<base_dir>/<YYYYMMDD>/<session_id>.jsonl``.
When a file grows past ``max_bytes`` the journal continues in
``<session_id>.01.jsonl``, ``<session_id>.02.jsonl`` and so on.
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping

from contracts.schema_validator import validate_event

__all__ = ["DEFAULT_MAX_BYTES", "SessionJournal"]

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionJournal:
    """Append-only event log for one game session.

    Events must carry this journal's ``session_id``; they are checked against
    the session event schema before anything touches the disk. File system
    errors propagate as :class:`OSError` so the caller decides whether the
    game goes on without a journal.
    """

    def __init__(
        self,
        base_dir: str | Path,
        *,
        session_id: str | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.session_id = session_id or uuid.uuid4().hex
        self.max_bytes = max_bytes or DEFAULT_MAX_BYTES
        self._lock = threading.Lock()
        self._day = _utc_now().strftime("%Y%m%d")
        self._part = 0
        self._paths: List[Path] = []

    @property
    def directory(self) -> Path:
        return self.base_dir / self._day

    @property
    def paths(self) -> List[Path]:
        """Files written so far, oldest first."""

        return list(self._paths)

    def _part_path(self) -> Path:
        suffix = "" if self._part == 0 else f".{self._part:02d}"
        return self.directory / f"{self.session_id}{suffix}.jsonl"

    def _active_path(self) -> Path:
        path = self._part_path()
        while path.exists() and path.stat().st_size >= self.max_bytes:
            self._part += 1
            path = self._part_path()
        return path

    def append(self, event: Mapping[str, Any]) -> Path:
        """Validate ``event`` and append it as one JSON line; return the file."""

        payload: Dict[str, Any] = dict(event)
        owner = payload.setdefault("session_id", self.session_id)
        if owner != self.session_id:
            raise ValueError(f"event belongs to session {owner!r}, journal is {self.session_id!r}")
        payload.setdefault("ts", _utc_now().isoformat(timespec="milliseconds"))
        validate_event(payload)

        line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self._active_path()
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
            if path not in self._paths:
                self._paths.append(path)
        return path

    __call__ = append

    def read(self) -> List[Dict[str, Any]]:
        """Return every event written by this journal, in order."""

        events: List[Dict[str, Any]] = []
        for path in self._paths:
            for line in path.read_text(encoding="utf-8").splitlines():
                events.append(json.loads(line))
        return events
