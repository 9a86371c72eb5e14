from __future__ import annotations

import itertools

import pytest

from board.store import GridStore
from contracts.errors import Rejection
from rules.engine import Outcome, RuleEngine, Status
from rules.moves import SENTINEL, Move


def _engine(rows) -> RuleEngine:
    return RuleEngine(GridStore.from_rows(rows))


def _lines_are_latin(grid: GridStore) -> bool:
    for index in range(1, grid.size + 1):
        for line in (grid.row(index), grid.column(index)):
            values = [abs(v) for v in line if v != 0]
            if len(values) != len(set(values)):
                return False
    return True


def test_insert_into_empty_cell() -> None:
    engine = _engine([[0] * 4 for _ in range(4)])
    result = engine.apply(Move(1, 1, 1))
    assert result.status is Status.INSERTED
    assert result.outcome is Outcome.CONTINUE
    assert result.accepted
    assert engine.grid.get(1, 1) == 1


def test_duplicate_in_row_is_rejected() -> None:
    engine = _engine([[1, 0, 0, 0]] + [[0] * 4 for _ in range(3)])
    before = engine.grid.copy()
    result = engine.apply(Move(1, 2, 1))
    assert result.rejection is Rejection.DUPLICATE_VALUE
    assert result.outcome is Outcome.CONTINUE
    assert result.conflicts == ((1, 1),)
    assert engine.grid == before


def test_duplicate_in_column_is_rejected() -> None:
    engine = _engine([[0, 0, 0], [0, 0, 0], [0, 2, 0]])
    result = engine.apply(Move(1, 2, 2))
    assert result.rejection is Rejection.DUPLICATE_VALUE
    assert result.conflicts == ((3, 2),)
    assert engine.grid.get(1, 2) == 0


def test_both_axes_are_scanned() -> None:
    engine = _engine([[0, 3, 0], [0, 0, 0], [3, 0, 0]])
    result = engine.apply(Move(1, 1, 3))
    assert result.rejection is Rejection.DUPLICATE_VALUE
    assert set(result.conflicts) == {(1, 2), (3, 1)}


def test_fixed_values_count_as_duplicates() -> None:
    engine = _engine([[0, -2], [0, 0]])
    result = engine.apply(Move(1, 1, 2))
    assert result.rejection is Rejection.DUPLICATE_VALUE


def test_clearing_fixed_cell_is_illegal() -> None:
    engine = _engine([[0, 0, 0], [0, -3, 0], [0, 0, 0]])
    result = engine.apply(Move(2, 2, 0))
    assert result.rejection is Rejection.ILLEGAL_CLEAR
    assert engine.grid.get(2, 2) == -3


def test_writing_over_fixed_cell_is_occupied() -> None:
    engine = _engine([[0, 0, 0], [0, -3, 0], [0, 0, 0]])
    result = engine.apply(Move(2, 2, 1))
    assert result.rejection is Rejection.CELL_OCCUPIED
    assert engine.grid.get(2, 2) == -3


def test_writing_over_player_value_is_occupied() -> None:
    engine = _engine([[1, 0], [0, 0]])
    result = engine.apply(Move(1, 1, 2))
    assert result.rejection is Rejection.CELL_OCCUPIED
    assert engine.grid.get(1, 1) == 1


def test_clearing_player_value() -> None:
    engine = _engine([[1, 0], [0, 0]])
    result = engine.apply(Move(1, 1, 0))
    assert result.status is Status.CLEARED
    assert result.outcome is Outcome.CONTINUE
    assert engine.grid.get(1, 1) == 0


def test_clearing_empty_cell_reports_cleared() -> None:
    engine = _engine([[0, 0], [0, 0]])
    result = engine.apply(Move(2, 2, 0))
    assert result.status is Status.CLEARED
    assert result.accepted
    assert engine.grid.get(2, 2) == 0


@pytest.mark.parametrize(
    "move",
    [Move(5, 5, 1), Move(0, 1, 1), Move(1, 0, 1), Move(1, 1, 5), Move(1, 1, -1), Move(-1, -1, 0), Move(0, 0, 1)],
)
def test_out_of_range(move: Move) -> None:
    engine = _engine([[0] * 4 for _ in range(4)])
    result = engine.apply(move)
    assert result.rejection is Rejection.OUT_OF_RANGE
    assert engine.grid.empty_cells() == 16


def test_sentinel_terminates_before_range_check() -> None:
    engine = _engine([[-1, 0], [0, -1]])
    result = engine.apply(SENTINEL)
    assert result.outcome is Outcome.TERMINATED
    assert result.status is Status.TERMINATED
    assert result.rejection is None


def test_last_insertion_completes_grid() -> None:
    engine = _engine([[-1, -2], [-2, 0]])
    result = engine.apply(Move(2, 2, 1))
    assert result.status is Status.INSERTED
    assert result.outcome is Outcome.COMPLETED


def test_rejection_messages_are_distinct() -> None:
    messages = {reason.message(4) for reason in Rejection}
    assert len(messages) == len(Rejection)
    assert Rejection.OUT_OF_RANGE.message(4) == "Error: i,j or val are outside the allowed range [1..4]!"


def test_accepted_insertions_keep_lines_latin() -> None:
    engine = _engine([[0, 0, -3], [0, 0, 0], [-3, 0, 0]])
    for row, col, value in itertools.product(range(1, 4), range(1, 4), range(0, 4)):
        before = engine.grid.copy()
        result = engine.apply(Move(row, col, value))
        if not result.accepted:
            assert engine.grid == before
        assert _lines_are_latin(engine.grid)


def test_find_conflicts_reports_pairs() -> None:
    grid = GridStore.from_rows([[1, -1, 0], [0, 0, 0], [-1, 0, 0]])
    conflicts = RuleEngine.find_conflicts(grid)
    described = {(c.axis, c.value, c.first, c.second) for c in conflicts}
    assert described == {
        ("row", 1, (1, 1), (1, 2)),
        ("column", 1, (1, 1), (3, 1)),
    }
    assert RuleEngine.find_conflicts(GridStore(3)) == []
