"""Formatting helpers shared by every report section."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Sequence

from reportlab.lib.units import mm

PX_TO_MM = 0.264583
EMPHASIS_KEYWORDS = ("total", "profit", "loss")
GROUPINGS = ("international", "indian")


def group_digits(value: int, grouping: str = "international") -> str:
    """Insert thousands separators; ``indian`` groups as 12,34,567."""
    digits = str(abs(int(value)))
    if grouping == "indian" and len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        return ",".join(pairs + [tail])
    if grouping not in GROUPINGS:
        raise ValueError(f"Unknown digit grouping {grouping!r}; expected one of {GROUPINGS}.")
    return f"{int(digits):,}"


def format_currency(amount: Any, grouping: str = "international") -> str:
    """Accounting format: zero or missing -> '-', negatives in parentheses, whole units."""
    if amount is None:
        return "-"
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return "-"
    if not math.isfinite(value) or value == 0:
        return "-"
    whole = int(Decimal(repr(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    text = group_digits(whole, grouping)
    return f"({text})" if value < 0 else text


def px_to_mm(px: float) -> float:
    return px * PX_TO_MM


def mm_to_pt(value: float) -> float:
    return value * mm


def is_emphasized_label(*cells: Any) -> bool:
    """Default emphasis rule: the first non-blank text cell mentions total, profit or loss."""
    for cell in cells:
        text = str(cell or "").strip().lower()
        if text:
            return any(keyword in text for keyword in EMPHASIS_KEYWORDS)
    return False


@dataclass(frozen=True)
class ColumnStyle:
    width: float
    align: str = "LEFT"


def compute_column_styles(
    available_width: float,
    weights: Sequence[float],
    amount_columns: Iterable[int] = (),
    center_columns: Iterable[int] = (),
) -> List[ColumnStyle]:
    """Split ``available_width`` proportionally; amount columns right-aligned."""
    if not weights or any(w <= 0 for w in weights):
        raise ValueError("Column weights must be positive.")
    amounts = set(amount_columns)
    centered = set(center_columns)
    total = float(sum(weights))
    styles = []
    for index, weight in enumerate(weights):
        align = "RIGHT" if index in amounts else "CENTER" if index in centered else "LEFT"
        styles.append(ColumnStyle(width=available_width * weight / total, align=align))
    return styles


def compute_equal_column_styles(
    available_width: float, columns: int, amount_columns: Iterable[int] = ()
) -> List[ColumnStyle]:
    if columns <= 0:
        raise ValueError("At least one column is required.")
    return compute_column_styles(available_width, [1.0] * columns, amount_columns)
