"""Interactive play loop driving the rule engine one command at a time."""

from __future__ import annotations

import logging
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, TextIO

from board.codec import write_grid
from board.store import GridStore
from contracts.errors import MoveFormatError, SaveError
from printer.text import render_grid, render_instructions
from rules.engine import MoveResult, Outcome, RuleEngine
from rules.moves import parse_move

_LOGGER = logging.getLogger(__name__)

EventSink = Callable[[Dict[str, Any]], Any]

ABORTED = "aborted"


@dataclass
class SessionSummary:
    """What a finished session reached and where it was saved."""

    outcome: str
    moves: int
    grid: GridStore
    saved_to: Optional[Path] = None
    save_error: Optional[SaveError] = None


class GameSession:
    """One play-through of a loaded grid.

    Commands are consumed from an iterable of lines until the player sends
    ``0,0=0``, the grid is completed or the input runs dry. The grid is saved
    to ``out_path`` in the first two cases.
    """

    def __init__(
        self,
        grid: GridStore,
        out_path: str | Path,
        *,
        stdout: TextIO | None = None,
        events: EventSink | None = None,
        source: str | Path | None = None,
        session_id: str | None = None,
    ) -> None:
        self.grid = grid
        self.engine = RuleEngine(grid)
        self.out_path = Path(out_path)
        self.session_id = session_id or uuid.uuid4().hex
        self.moves = 0
        self._stdout = stdout
        self._events = events
        self._source = None if source is None else str(source)

    def _write(self, text: str) -> None:
        out = self._stdout if self._stdout is not None else sys.stdout
        out.write(text)
        out.flush()

    def _emit(self, event: str, **fields: Any) -> None:
        if self._events is None:
            return
        payload: Dict[str, Any] = {"event": event, "session_id": self.session_id}
        payload.update({key: value for key, value in fields.items() if value is not None})
        try:
            self._events(payload)
        except OSError as exc:
            _LOGGER.error("Session journal failed, continuing without it: %s", exc)
            self._events = None

    def show_board(self) -> None:
        self._write(render_grid(self.grid))
        self._write(render_instructions(self.grid.size))

    def save(self) -> Path:
        """Write the grid to ``out_path``; raises :class:`SaveError`."""

        path = write_grid(self.grid, self.out_path)
        self._write(f"Saving to {path}...\nDone\n")
        self._emit("session.saved", path=str(path))
        return path

    def _finish(self, outcome: str, *, save: bool) -> SessionSummary:
        summary = SessionSummary(outcome=outcome, moves=self.moves, grid=self.grid)
        if save:
            try:
                summary.saved_to = self.save()
            except SaveError as exc:
                _LOGGER.error("Saving failed: %s", exc)
                self._write(f"Error : Unable to generate file {exc.path} to save the game!\n")
                self._emit("session.save_failed", path=exc.path, detail=exc.detail)
                summary.save_error = exc
        self._emit("session.ended", outcome=outcome, moves=self.moves, empty_cells=self.grid.empty_cells())
        return summary

    def handle(self, raw: str) -> Optional[MoveResult]:
        """Process one command line; ``None`` means it could not be parsed."""

        try:
            move = parse_move(raw)
        except MoveFormatError:
            self._write("Error: wrong format of command\n\n")
            self._emit("move.malformed", raw=raw.rstrip("\r\n"))
            return None

        result = self.engine.apply(move)
        if result.outcome is Outcome.TERMINATED:
            return result

        if result.rejection is not None:
            self._write(result.message(self.grid.size) + "\n\n")
            self._emit("move.rejected", move=list(move.as_tuple()), reason=result.rejection.value)
            return result

        self.moves += 1
        self._write("\n" + result.message(self.grid.size) + "\n\n")
        self._emit(
            "move.accepted",
            move=list(move.as_tuple()),
            status=result.status.value,
            outcome=result.outcome.value,
        )
        if result.outcome is Outcome.COMPLETED:
            self._write("Game completed!!!\n")
            self._write(render_grid(self.grid))
        else:
            self.show_board()
        return result

    def run(self, lines: Iterable[str]) -> SessionSummary:
        """Play until termination, completion or end of input."""

        for conflict in RuleEngine.find_conflicts(self.grid):
            _LOGGER.warning(
                "Loaded grid repeats %d in %s between %s and %s",
                conflict.value,
                conflict.axis,
                conflict.first,
                conflict.second,
            )
        self._emit("session.started", source=self._source, size=self.grid.size)
        self.show_board()

        for raw in lines:
            if not raw.strip():
                continue
            result = self.handle(raw)
            if result is None:
                continue
            if result.outcome is Outcome.TERMINATED:
                return self._finish(Outcome.TERMINATED.value, save=True)
            if result.outcome is Outcome.COMPLETED:
                return self._finish(Outcome.COMPLETED.value, save=True)

        _LOGGER.warning("Input ended before the game was saved")
        return self._finish(ABORTED, save=False)


__all__ = ["ABORTED", "EventSink", "GameSession", "SessionSummary"]
