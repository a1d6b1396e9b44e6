from __future__ import annotations

from datetime import date

import pytest

from annual_report.domain.errors import InvalidFiscalYear
from annual_report.domain.models.financials import (
    CompanyInfo,
    Expense,
    FinancialData,
    FiscalYear,
    LedgerRecords,
    coerce_amount,
)


@pytest.mark.parametrize("raw", ["2024-25", "2024-2025", "FY 2024-25", "2024", "24-25", 2024])
def test_fiscal_year_parse_variants(raw):
    fy = FiscalYear.parse(raw)
    assert fy.label == "2024-25"
    assert fy.start_date == date(2024, 4, 1)
    assert fy.end_date == date(2025, 3, 31)
    assert fy.assessment_year == "2025-26"


@pytest.mark.parametrize("raw", ["2024-26", "", "twenty", "2024/2026"])
def test_fiscal_year_rejects_bad_input(raw):
    with pytest.raises(InvalidFiscalYear):
        FiscalYear.parse(raw)


def test_fiscal_year_window_bounds():
    fy = FiscalYear(2024)
    assert fy.contains(date(2024, 4, 1))
    assert fy.contains(date(2025, 3, 31))
    assert not fy.contains(date(2024, 3, 31))
    assert not fy.contains(None)
    assert fy.previous().label == "2023-24"


def test_company_directors_and_owner_override():
    company = CompanyInfo.from_mapping({"company_name": "Acme", "owner_name": "A", "director_din": "1"})
    assert company.directors == [("A", "1")]
    assert company.with_owner("B").directors == [("B", "1")]
    assert company.with_owner(None) is company
    assert CompanyInfo.from_mapping({}).company_name == "COMPANY"


def test_loose_ledger_values_are_coerced():
    assert coerce_amount("1,200.50") == pytest.approx(1200.5)
    assert coerce_amount(None) == 0.0
    assert coerce_amount("abc") == 0.0

    expense = Expense.from_mapping({"expense_date": "2024-05-01T10:00:00", "amount": "100", "total_amount": "118"})
    assert expense.expense_date == date(2024, 5, 1)
    assert expense.effective_amount == pytest.approx(118.0)


def test_ledger_records_reject_unknown_tables():
    with pytest.raises(ValueError):
        LedgerRecords.from_mappings(bogus=[])


def test_balance_check_and_eps():
    data = FinancialData(total_assets=100.0, total_liabilities=100.4, profit_after_tax=5000.0)
    assert data.is_balanced()
    assert data.balance_difference == pytest.approx(-0.4)
    assert data.earnings_per_share(1000) == pytest.approx(5.0)
    assert data.earnings_per_share(0) == 0.0
