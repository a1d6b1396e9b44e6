"""Matplotlib charts embedded in the report, rendered in memory as PNG."""
from __future__ import annotations

import io
from typing import Sequence, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.ticker import FuncFormatter  # noqa: E402

from annual_report.reports.formatting import format_currency  # noqa: E402

POSITIVE_COLOR = "#2F6DB5"
NEGATIVE_COLOR = "#C0392B"


def highlights_bar_chart(
    values: Sequence[float],
    labels: Sequence[str],
    *,
    title: str = "",
    grouping: str = "international",
    figsize: Tuple[float, float] = (6.0, 2.8),
    dpi: int = 150,
) -> bytes:
    """Bar chart of headline figures; negative bars hang below the zero axis."""
    if len(values) != len(labels):
        raise ValueError("values and labels must have the same length")
    fig, ax = plt.subplots(figsize=figsize)
    try:
        bar_colors = [NEGATIVE_COLOR if v < 0 else POSITIVE_COLOR for v in values]
        bars = ax.bar(list(labels), list(values), color=bar_colors, width=0.55)
        ax.axhline(0, color="#333333", linewidth=0.8)
        for bar, value in zip(bars, values):
            ax.annotate(
                format_currency(value, grouping),
                (bar.get_x() + bar.get_width() / 2, value),
                ha="center",
                va="bottom" if value >= 0 else "top",
                fontsize=7,
            )
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.tick_params(labelsize=8)
        ax.yaxis.set_major_formatter(
            FuncFormatter(lambda v, _pos: format_currency(v, grouping))
        )
        if title:
            ax.set_title(title, fontsize=9)
        fig.tight_layout()
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi)
        return buf.getvalue()
    finally:
        plt.close(fig)
