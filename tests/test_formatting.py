from __future__ import annotations

import math

import pytest

from annual_report.reports.formatting import (
    compute_column_styles,
    compute_equal_column_styles,
    format_currency,
    group_digits,
    is_emphasized_label,
    px_to_mm,
)


def test_currency_uses_accounting_conventions():
    assert format_currency(1234567) == "1,234,567"
    assert format_currency(-50000) == "(50,000)"
    assert format_currency(0) == "-"
    assert format_currency(None) == "-"
    assert format_currency(math.nan) == "-"
    assert format_currency("not a number") == "-"


def test_currency_rounds_half_up_to_whole_units():
    assert format_currency(2.5) == "3"
    assert format_currency(87499.5) == "87,500"
    assert format_currency(-1234.49) == "(1,234)"


def test_indian_grouping():
    assert group_digits(1234567, "indian") == "12,34,567"
    assert group_digits(999, "indian") == "999"
    assert format_currency(-12345678, "indian") == "(1,23,45,678)"


def test_unknown_grouping_rejected():
    with pytest.raises(ValueError):
        group_digits(1000, "roman")


def test_emphasis_follows_first_non_blank_cell():
    assert is_emphasized_label("Total Revenue (I+II)")
    assert is_emphasized_label("", "Profit/(Loss) for the period")
    assert not is_emphasized_label("Revenue from Operations", "Total")
    assert not is_emphasized_label("", "")


def test_column_styles_split_width_proportionally():
    styles = compute_column_styles(300.0, [1, 4, 1], amount_columns=(2,), center_columns=(0,))
    assert [s.width for s in styles] == pytest.approx([50.0, 200.0, 50.0])
    assert [s.align for s in styles] == ["CENTER", "LEFT", "RIGHT"]

    equal = compute_equal_column_styles(120.0, 3)
    assert sum(s.width for s in equal) == pytest.approx(120.0)

    with pytest.raises(ValueError):
        compute_column_styles(100.0, [1, 0])


def test_px_to_mm():
    assert px_to_mm(40) == pytest.approx(10.58332)
