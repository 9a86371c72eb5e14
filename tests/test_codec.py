from __future__ import annotations

from pathlib import Path

import pytest

from board.codec import format_grid, output_path_for, parse_grid, read_grid, write_grid
from board.store import GridStore
from contracts.errors import InvalidData, InvalidSize, MissingFile, SaveError


def test_parse_grid_reads_signed_values_row_major() -> None:
    grid = parse_grid("3\n0 -1 0\n-2 0 0\n0 0 -3\n")
    assert grid.size == 3
    assert grid.rows() == [[0, -1, 0], [-2, 0, 0], [0, 0, -3]]
    assert grid.is_fixed(3, 3)


def test_parse_grid_ignores_line_layout_and_trailing_tokens() -> None:
    grid = parse_grid("2 0 -1\n-1 0 99 junk")
    assert grid.rows() == [[0, -1], [-1, 0]]


def test_parse_grid_copies_positive_values_verbatim() -> None:
    grid = parse_grid("2\n1 0\n0 0\n")
    assert grid.get(1, 1) == 1
    assert grid.is_fixed(1, 1) is False


@pytest.mark.parametrize("text", ["", "0\n", "10\n", "-1\n", "abc\n1 2"])
def test_invalid_size(text: str) -> None:
    with pytest.raises(InvalidSize):
        parse_grid(text, max_size=9)


def test_size_bound_follows_max_size() -> None:
    text = "4\n" + " ".join(["0"] * 16)
    with pytest.raises(InvalidSize):
        parse_grid(text, max_size=3)
    assert parse_grid(text, max_size=4).size == 4


def test_missing_cells_are_invalid_data() -> None:
    with pytest.raises(InvalidData) as excinfo:
        parse_grid("2\n0 0\n0\n")
    assert "expected 4" in excinfo.value.detail


def test_non_integer_cell_is_invalid_data() -> None:
    with pytest.raises(InvalidData):
        parse_grid("2\n0 x\n0 0\n")


def test_read_grid_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MissingFile) as excinfo:
        read_grid(tmp_path / "nope.txt")
    assert excinfo.value.path == str(tmp_path / "nope.txt")


def test_read_grid_reports_source_path(write_grid_file) -> None:
    path = write_grid_file("12\n")
    with pytest.raises(InvalidSize) as excinfo:
        read_grid(path)
    assert excinfo.value.path == str(path)


def test_format_grid_layout() -> None:
    grid = GridStore.from_rows([[1, -2, 0], [0, 0, -1], [2, 0, 0]])
    assert format_grid(grid) == "3\n1 -2 0\n0 0 -1\n2 0 0\n"


def test_save_then_load_reproduces_grid(tmp_path: Path) -> None:
    grid = GridStore.from_rows([[0, -3, 0], [2, 0, 0], [0, 0, -1]])
    path = write_grid(grid, tmp_path / "saved.txt")
    loaded = read_grid(path)
    assert loaded.size == grid.size
    assert loaded == grid


def test_write_grid_unwritable_path(tmp_path: Path) -> None:
    with pytest.raises(SaveError) as excinfo:
        write_grid(GridStore(1), tmp_path / "missing-dir" / "out.txt")
    assert excinfo.value.path.endswith("out.txt")


def test_output_path_prefixes_file_name(tmp_path: Path) -> None:
    source = tmp_path / "games" / "easy.txt"
    assert output_path_for(source, "out-") == tmp_path / "games" / "out-easy.txt"
    assert output_path_for(source, "out-", tmp_path) == tmp_path / "out-easy.txt"
