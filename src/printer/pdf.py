"""Render a board snapshot to a one-page PDF."""

from __future__ import annotations

import logging
from pathlib import Path

from board.store import GridStore
from contracts.errors import SaveError

_LOGGER = logging.getLogger(__name__)

INCH_PER_CM = 0.3937007874
MARGIN_CM = 1.0
TITLE_CM = 1.0


def _draw_grid(ax, grid: GridStore, font_size: int) -> None:
    size = grid.size
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")
    for idx in range(size + 1):
        linewidth = 3.0 if idx in (0, size) else 1.5
        ax.axvline(idx / size, color="k", linewidth=linewidth)
        ax.axhline(idx / size, color="k", linewidth=linewidth)
    for r, row in enumerate(grid.rows()):
        for c, value in enumerate(row):
            if value == 0:
                continue
            x = (c + 0.5) / size
            y = 1 - (r + 0.5) / size
            weight = "bold" if value < 0 else "normal"
            ax.text(x, y, str(abs(value)), ha="center", va="center", fontsize=font_size, fontweight=weight)


def export_pdf(
    grid: GridStore,
    out_path: str | Path,
    *,
    cell_cm: float = 1.5,
    font_scale: float = 0.55,
    title: str | None = None,
) -> Path:
    """Draw ``grid`` into ``out_path`` and return the written path.

    Givens are printed in bold, player values in regular weight and empty
    cells are left blank.
    """

    import matplotlib

    matplotlib.use("Agg")
    from matplotlib.backends.backend_pdf import PdfPages
    import matplotlib.pyplot as plt

    path = Path(out_path)
    board_in = grid.size * cell_cm * INCH_PER_CM
    margin_in = MARGIN_CM * INCH_PER_CM
    title_in = TITLE_CM * INCH_PER_CM if title else 0.0
    page_w_in = board_in + 2 * margin_in
    page_h_in = board_in + 2 * margin_in + title_in
    font_size = max(1, int(font_scale * cell_cm * INCH_PER_CM * 72))

    fig = plt.figure(figsize=(page_w_in, page_h_in))
    try:
        ax = fig.add_axes(
            [margin_in / page_w_in, margin_in / page_h_in, board_in / page_w_in, board_in / page_h_in],
            frameon=False,
        )
        _draw_grid(ax, grid, font_size)
        if title:
            fig.text(0.5, 1 - (margin_in / 2) / page_h_in, title, ha="center", va="top", fontsize=10)
        with PdfPages(path) as pdf:
            pdf.savefig(fig)
    except OSError as exc:
        raise SaveError(path, str(exc)) from exc
    finally:
        plt.close(fig)

    _LOGGER.info("Exported %dx%d board to %s", grid.size, grid.size, path)
    return path


__all__ = ["export_pdf"]
