from __future__ import annotations

from datetime import date

import pytest

from annual_report.domain.models.financials import ExpenseCategory, FiscalYear, LedgerRecords
from annual_report.domain.services.aggregation import FinancialAggregator, aggregate, categorize_expense
from annual_report.domain.services.tax import FlatRateTaxPolicy, cess_label, rate_label


def test_profit_and_tax_for_sample_year(ledger_records, fiscal_year):
    data = aggregate(ledger_records, fiscal_year)

    assert data.revenue_from_operations == pytest.approx(500000.0)
    assert data.total_revenue == pytest.approx(500000.0)
    assert data.employee_benefit == pytest.approx(100000.0)
    assert data.other_expenses == pytest.approx(50000.0)
    assert data.total_expenses == pytest.approx(150000.0)
    assert data.profit_before_tax == pytest.approx(350000.0)
    assert data.tax_expense == pytest.approx(87500.0)
    assert data.profit_after_tax == pytest.approx(262500.0)
    assert data.total_invoices == 1
    assert data.total_gst == pytest.approx(90000.0)
    assert data.cgst == pytest.approx(45000.0)


def test_balance_sheet_figures(ledger_records, fiscal_year):
    data = aggregate(ledger_records, fiscal_year, share_capital=10000)

    assert data.trade_receivables == pytest.approx(25000.0)
    assert data.trade_payables == pytest.approx(12000.0)
    assert data.cash_and_bank == pytest.approx(40000.0)
    assert data.reserves_and_surplus == pytest.approx(data.profit_after_tax)
    assert data.total_liabilities == pytest.approx(10000 + 262500 + 12000)
    assert data.total_assets == pytest.approx(65000.0)
    assert not data.is_balanced()


def test_loss_year_pays_no_tax(fiscal_year):
    records = LedgerRecords.from_mappings(
        invoices=[{"invoice_date": "2024-05-01", "amount": 100000, "status": "pending"}],
        expenses=[{"expense_date": "2024-06-01", "amount": 150000, "category_name": "Rent"}],
    )
    data = aggregate(records, fiscal_year)

    assert data.profit_before_tax == pytest.approx(-50000.0)
    assert data.tax_expense == 0.0
    assert data.profit_after_tax == pytest.approx(-50000.0)
    assert data.pending_invoices == 1


def test_cancelled_invoices_and_posted_journals(fiscal_year):
    records = LedgerRecords.from_mappings(
        invoices=[
            {"invoice_date": "2024-05-01", "amount": 1000, "status": "paid"},
            {"invoice_date": "2024-05-02", "amount": 9000, "status": "cancelled"},
        ],
        journals=[
            {"journal_date": "2024-09-01", "total_credit": 20000, "status": "posted"},
            {"journal_date": "2024-09-02", "total_credit": 50000, "status": "draft"},
        ],
    )
    data = aggregate(records, fiscal_year)

    assert data.revenue_from_operations == pytest.approx(1000.0)
    assert data.other_income == pytest.approx(2000.0)
    assert [line.description for line in data.income_details] == ["Gross Receipts", "Other Income"]


def test_aggregation_is_repeatable(ledger_records, fiscal_year):
    aggregator = FinancialAggregator(FlatRateTaxPolicy())
    assert aggregator.aggregate(ledger_records, fiscal_year) == aggregator.aggregate(ledger_records, fiscal_year)


def test_receivables_ignore_the_fiscal_year_window(ledger_records):
    later = aggregate(ledger_records, FiscalYear(2030))
    assert later.total_revenue == 0.0
    assert later.trade_receivables == pytest.approx(25000.0)


def test_expense_lines_group_by_label_and_bucket(fiscal_year):
    records = LedgerRecords.from_mappings(
        expenses=[
            {"expense_date": "2024-04-05", "amount": 100, "total_amount": 118, "category_name": "Travel"},
            {"expense_date": "2024-04-06", "amount": 50, "category_name": ""},
            {"expense_date": "2024-04-07", "amount": 200, "category_name": "Travel"},
            {"expense_date": "2024-04-08", "amount": 75, "category_name": "Bank Charges"},
            {"expense_date": "2024-04-09", "amount": 30, "category_name": "Misc", "category_code": "depreciation"},
        ]
    )
    data = aggregate(records, fiscal_year)
    lines = {line.category: line for line in data.expense_details}

    assert lines["Travel"].amount == pytest.approx(318.0)
    assert lines["Uncategorized"].bucket is ExpenseCategory.OTHER
    assert lines["Bank Charges"].bucket is ExpenseCategory.FINANCE_COST
    assert data.financial_costs == pytest.approx(75.0)
    assert data.depreciation == pytest.approx(30.0)
    assert [line.category for line in data.other_expense_lines()] == ["Travel", "Uncategorized"]


def test_same_label_with_different_codes_keeps_separate_buckets(fiscal_year):
    records = LedgerRecords.from_mappings(
        expenses=[
            {"expense_date": "2024-05-01", "amount": 400, "category_name": "Vehicle"},
            {"expense_date": "2024-05-02", "amount": 900, "category_name": "Vehicle", "category_code": "depreciation"},
            {"expense_date": "2024-05-03", "amount": 100, "category_name": "Vehicle"},
        ]
    )
    data = aggregate(records, fiscal_year)
    lines = [(line.category, line.bucket, line.amount) for line in data.expense_details]

    assert lines == [
        ("Vehicle", ExpenseCategory.OTHER, pytest.approx(500.0)),
        ("Vehicle", ExpenseCategory.DEPRECIATION, pytest.approx(900.0)),
    ]
    assert data.depreciation == pytest.approx(900.0)
    assert data.other_expenses == pytest.approx(500.0)


def test_tds_rows_are_limited_to_the_year(fiscal_year):
    records = LedgerRecords.from_mappings(
        tds_transactions=[
            {"transaction_date": date(2024, 10, 1), "transaction_amount": 50000, "tds_amount": 1000, "section": "194J"},
            {"transaction_date": date(2023, 10, 1), "transaction_amount": 50000, "tds_amount": 1000},
        ]
    )
    data = aggregate(records, fiscal_year)

    assert data.total_tds == pytest.approx(1000.0)
    assert [t.section for t in data.tds_transactions] == ["194J"]


def test_categorize_expense():
    assert categorize_expense("Payroll") is ExpenseCategory.EMPLOYEE_BENEFIT
    assert categorize_expense("Stationery") is ExpenseCategory.OTHER
    assert categorize_expense("Stationery", "finance_cost") is ExpenseCategory.FINANCE_COST


def test_flat_rate_policy():
    policy = FlatRateTaxPolicy(rate=0.3, cess_rate=0.04)
    assert policy.estimate(1000) == pytest.approx(300.0)
    assert policy.estimate(-10) == 0.0
    assert policy.cess(300) == pytest.approx(12.0)
    assert rate_label(policy) == "30%"
    assert cess_label(policy) == "4%"
    with pytest.raises(ValueError):
        FlatRateTaxPolicy(rate=-0.1)
