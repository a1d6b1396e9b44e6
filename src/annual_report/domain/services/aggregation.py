"""Financial aggregation: reduce raw ledger records into the report aggregate.

The reduction is pure. Period flows (invoices, expenses, journals, TDS
transactions) are restricted to the fiscal-year window, while receivables and
payables are point-in-time balances selected by outstanding status. Expense
category labels roll up into statement buckets through ``EXPENSE_CATEGORY_MAP``;
labels outside the map land in the "other expenses" bucket.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from annual_report.domain.models.financials import (
    ExpenseCategory,
    ExpenseLine,
    FinancialData,
    FiscalYear,
    IncomeLine,
    LedgerRecords,
)
from annual_report.domain.services.tax import FlatRateTaxPolicy, TaxPolicy

logger = logging.getLogger(__name__)

EXPENSE_CATEGORY_MAP: Dict[str, ExpenseCategory] = {
    "Salary": ExpenseCategory.EMPLOYEE_BENEFIT,
    "Payroll": ExpenseCategory.EMPLOYEE_BENEFIT,
    "Bank Charges": ExpenseCategory.FINANCE_COST,
    "Interest": ExpenseCategory.FINANCE_COST,
    "Depreciation": ExpenseCategory.DEPRECIATION,
}
UNCATEGORIZED_LABEL = "Uncategorized"

REVENUE_INVOICE_STATUSES = ("paid", "pending")
POSTED_JOURNAL_STATUS = "posted"
# Simplified other-income rule: a tenth of posted journal credits.
OTHER_INCOME_JOURNAL_SHARE = 0.1
DEFAULT_SHARE_CAPITAL = 10000.0


def categorize_expense(label: str, code: str = "") -> ExpenseCategory:
    """Resolve an expense bucket; an explicit category code wins over the label."""
    if code:
        try:
            return ExpenseCategory(code.strip().lower())
        except ValueError:
            logger.debug("Unknown expense category code %r; falling back to label", code)
    return EXPENSE_CATEGORY_MAP.get(label, ExpenseCategory.OTHER)


def _finite(value: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else 0.0


def _frame(rows: Sequence, columns: Iterable[str]) -> pd.DataFrame:
    """DataFrame from dataclass rows that keeps its columns even when empty."""
    columns = list(columns)
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([asdict(row) for row in rows], columns=columns)


def _within(frame: pd.DataFrame, date_column: str, fiscal_year: FiscalYear) -> pd.DataFrame:
    if frame.empty:
        return frame
    mask = frame[date_column].map(fiscal_year.contains).astype(bool)
    return frame[mask]


def _sum(series: pd.Series) -> float:
    if series.empty:
        return 0.0
    values = pd.to_numeric(series, errors="coerce").to_numpy(dtype=float)
    values = values[np.isfinite(values)]
    return _finite(math.fsum(values.tolist()))


class FinancialAggregator:
    """Reduce ledger records for one fiscal year into a ``FinancialData`` aggregate."""

    def __init__(
        self,
        tax_policy: Optional[TaxPolicy] = None,
        *,
        share_capital: float = DEFAULT_SHARE_CAPITAL,
    ) -> None:
        self._tax_policy = tax_policy or FlatRateTaxPolicy()
        self._share_capital = float(share_capital)

    @property
    def tax_policy(self) -> TaxPolicy:
        return self._tax_policy

    def aggregate(self, records: LedgerRecords, fiscal_year: FiscalYear) -> FinancialData:
        invoices = _within(
            _frame(records.invoices, ["invoice_date", "amount", "status", "gst_amount", "invoice_number"]),
            "invoice_date",
            fiscal_year,
        )
        expenses = _within(
            _frame(records.expenses, ["expense_date", "amount", "total_amount", "category_name", "category_code"]),
            "expense_date",
            fiscal_year,
        )
        journals = _within(
            _frame(records.journals, ["journal_date", "total_credit", "status"]), "journal_date", fiscal_year
        )
        tds = [t for t in records.tds_transactions if fiscal_year.contains(t.transaction_date)]

        # Revenue
        revenue_from_operations = _sum(invoices.loc[invoices["status"].isin(REVENUE_INVOICE_STATUSES), "amount"])
        posted_credit = _sum(journals.loc[journals["status"] == POSTED_JOURNAL_STATUS, "total_credit"])
        other_income = _finite(posted_credit * OTHER_INCOME_JOURNAL_SHARE)

        # Expenses
        expense_details = self._expense_details(expenses)
        buckets = {bucket: 0.0 for bucket in ExpenseCategory}
        for line in expense_details:
            buckets[line.bucket] += line.amount
        employee_benefit = _finite(buckets[ExpenseCategory.EMPLOYEE_BENEFIT])
        financial_costs = _finite(buckets[ExpenseCategory.FINANCE_COST])
        depreciation = _finite(buckets[ExpenseCategory.DEPRECIATION])
        other_expenses = _finite(buckets[ExpenseCategory.OTHER])
        cost_of_materials = 0.0

        total_revenue = revenue_from_operations + other_income
        total_expenses = cost_of_materials + employee_benefit + financial_costs + depreciation + other_expenses
        profit_before_tax = total_revenue - total_expenses
        tax_expense = _finite(self._tax_policy.estimate(profit_before_tax))
        profit_after_tax = profit_before_tax - tax_expense

        # Balance sheet (point-in-time)
        trade_receivables = _finite(
            math.fsum(r.amount_remaining for r in records.receivables if r.status != "paid")
        )
        trade_payables = _finite(math.fsum(p.amount_remaining for p in records.payables if p.status != "paid"))
        cash_and_bank = _finite(
            math.fsum(
                account.opening_balance
                for account in records.accounts
                if account.account_type == "Asset"
                and ("cash" in account.account_name.lower() or "bank" in account.account_name.lower())
            )
        )
        share_capital = self._share_capital
        reserves_and_surplus = profit_after_tax
        total_liabilities = share_capital + reserves_and_surplus + trade_payables
        total_assets = trade_receivables + cash_and_bank

        total_gst = _sum(invoices["gst_amount"])
        income_details = [IncomeLine("Gross Receipts", revenue_from_operations)]
        if other_income > 0:
            income_details.append(IncomeLine("Other Income", other_income))

        data = FinancialData(
            revenue_from_operations=revenue_from_operations,
            other_income=other_income,
            total_revenue=total_revenue,
            cost_of_materials=cost_of_materials,
            employee_benefit=employee_benefit,
            financial_costs=financial_costs,
            depreciation=depreciation,
            other_expenses=other_expenses,
            total_expenses=total_expenses,
            profit_before_tax=profit_before_tax,
            tax_expense=tax_expense,
            profit_after_tax=profit_after_tax,
            share_capital=share_capital,
            reserves_and_surplus=reserves_and_surplus,
            trade_payables=trade_payables,
            other_current_liabilities=trade_payables,
            total_liabilities=total_liabilities,
            fixed_assets=0.0,
            trade_receivables=trade_receivables,
            cash_and_bank=cash_and_bank,
            other_current_assets=trade_receivables,
            total_assets=total_assets,
            total_tds=_finite(math.fsum(t.tds_amount for t in tds)),
            tds_transactions=tuple(tds),
            expense_details=tuple(expense_details),
            income_details=tuple(income_details),
            total_invoices=int(len(invoices)),
            paid_invoices=int((invoices["status"] == "paid").sum()) if not invoices.empty else 0,
            pending_invoices=int((invoices["status"] == "pending").sum()) if not invoices.empty else 0,
            total_gst=total_gst,
            cgst=total_gst / 2,
            sgst=total_gst / 2,
        )
        if not data.is_balanced():
            logger.warning(
                "FY %s balance sheet differs by %.2f (assets %.2f, equity & liabilities %.2f)",
                fiscal_year.label,
                data.balance_difference,
                data.total_assets,
                data.total_liabilities,
            )
        return data

    @staticmethod
    def _expense_details(expenses: pd.DataFrame) -> List[ExpenseLine]:
        """(label, bucket) -> amount in order of first appearance.

        Rows sharing a label but resolving to different buckets stay separate
        lines so each amount lands in the statement line its code names.
        """
        if expenses.empty:
            return []
        gross = pd.to_numeric(expenses["total_amount"], errors="coerce").fillna(0.0)
        net = pd.to_numeric(expenses["amount"], errors="coerce").fillna(0.0)
        names = expenses["category_name"].fillna("").astype(str)
        codes = expenses["category_code"].fillna("").astype(str)
        frame = pd.DataFrame(
            {
                "label": names.where(names != "", UNCATEGORIZED_LABEL),
                "bucket": [categorize_expense(name, code).value for name, code in zip(names, codes)],
                "value": gross.where(gross != 0, net),
            }
        )
        grouped = frame.groupby(["label", "bucket"], sort=False)["value"].sum()
        return [
            ExpenseLine(str(label), _finite(amount), ExpenseCategory(bucket))
            for (label, bucket), amount in grouped.items()
        ]


def aggregate(
    records: LedgerRecords,
    fiscal_year: FiscalYear,
    tax_policy: Optional[TaxPolicy] = None,
    *,
    share_capital: float = DEFAULT_SHARE_CAPITAL,
) -> FinancialData:
    """Functional shortcut around ``FinancialAggregator``."""
    return FinancialAggregator(tax_policy, share_capital=share_capital).aggregate(records, fiscal_year)
