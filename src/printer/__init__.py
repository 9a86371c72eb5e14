"""Board presentation: console text and PDF export."""

from .pdf import export_pdf
from .text import render_grid, render_instructions

__all__ = ["export_pdf", "render_grid", "render_instructions"]
