"""Console rendering of the board and the command menu."""

from __future__ import annotations

from typing import List

from board.store import GridStore


def _border(size: int) -> str:
    return "+-----" * size + "+"


def render_grid(grid: GridStore) -> str:
    """Draw ``grid`` as a boxed table; givens are shown in parentheses."""

    lines: List[str] = []
    for row in grid.rows():
        lines.append(_border(grid.size))
        cells = []
        for value in row:
            if value < 0:
                cells.append(f"| ({-value}) ")
            else:
                cells.append(f"|  {value}  ")
        lines.append("".join(cells) + "|")
    lines.append(_border(grid.size))
    return "\n".join(lines) + "\n"


def render_instructions(size: int) -> str:
    return (
        "Enter your command in the following format:\n"
        "+ i,j=val: for entering val at position (i,j)\n"
        "+ i,j=0 : for clearing cell (i,j)\n"
        "+ 0,0=0 : for saving and ending the game\n"
        f"Notice: i,j,val numbering is from [1..{size}]\n"
    )


__all__ = ["render_grid", "render_instructions"]
