"""Matplotlib drawing of a K-map and its chosen terms."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .geometry import Term
from .kmap import CellValue, KMap
from .layout import binary_to_gray
from .solution import Solution

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]

CELL_STYLE = {
    CellValue.HIGH: ("1", "#1f3c88"),
    CellValue.DONT_CARE: ("X", "#ff8c32"),
    CellValue.LOW: ("0", "#9aa7b7"),
}


def axis_labels(names: Sequence[str], count: int) -> List[str]:
    """Return Gray-code labels such as ``AB=01`` for each row or column."""
    prefix = "".join(names)
    width = len(names)
    return [f"{prefix}={binary_to_gray(i):0{width}b}" for i in range(count)]


def _runs(indices: Sequence[int]) -> List[Tuple[int, int]]:
    """Split wrapped indices into (start, length) runs that do not cross the edge."""
    runs: List[Tuple[int, int]] = []
    for index in indices:
        if runs and runs[-1][0] + runs[-1][1] == index:
            start, length = runs[-1]
            runs[-1] = (start, length + 1)
        else:
            runs.append((index, 1))
    return runs


def term_patches(term: Term) -> List[Tuple[int, int, int, int]]:
    """Return (row, col, rows, cols) boxes that together outline a term."""
    return [
        (r0, c0, rows, cols)
        for r0, rows in _runs(term.rows())
        for c0, cols in _runs(term.columns())
    ]


def draw_kmap(kmap: KMap, solution: Optional[Solution] = None, ax=None):
    """Draw the map's cells and, when given, the terms of a solution."""
    layout = kmap.layout
    nrows, ncols = layout.shape
    if ax is None:
        fig, ax = plt.subplots(figsize=(1.3 * ncols + 1, 1.3 * nrows + 1))
    else:
        fig = ax.figure

    # widen the limits a little so row/column labels are not clipped
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    row_names = kmap.variable_names[: layout.row_variable_count]
    column_names = kmap.variable_names[layout.row_variable_count:]
    for j, lab in enumerate(axis_labels(column_names, ncols)):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=9, color="#333")
    for i, lab in enumerate(axis_labels(row_names, nrows)):
        ax.text(-0.05, i + 0.5, lab, ha="right", va="center", fontsize=9, color="#333")

    for point, value in kmap.scan():
        text, color = CELL_STYLE[value]
        ax.text(point.col + 0.5, point.row + 0.5, text, color=color,
                fontsize=13, ha="center", va="center", weight="bold")

    if solution is not None:
        for i, term in enumerate(solution.terms):
            color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
            # inset each term a little so overlapping outlines stay visible
            inset = 0.06 + 0.04 * (i % 4)
            for r0, c0, rows, cols in term_patches(term):
                rect = plt.Rectangle(
                    (c0 + inset, r0 + inset), cols - 2 * inset, rows - 2 * inset,
                    fill=False, color=color, lw=2.5, ls="-",
                )
                ax.add_patch(rect)

    return fig


__all__ = ["COLOR_PALETTE", "axis_labels", "draw_kmap", "term_patches"]
