"""Profit & Loss, Balance Sheet and Cash Flow schedules in the Companies Act format."""
from __future__ import annotations

from typing import List

from annual_report.reports.document import DocumentCursor, TableRow, TableSpec, TableTheme
from annual_report.reports.sections.base import (
    Note,
    ReportContext,
    columns,
    company_header,
    document_title,
    signature_block,
    statement_remarks,
)

DASH = "-"


def _blank(width: int) -> TableRow:
    return TableRow([""] * width, emphasized=False)


def profit_and_loss_rows(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    m = ctx.money
    eps = m(d.earnings_per_share(ctx.shares_outstanding))
    return [
        TableRow(["I", "Revenue from Operations", Note.REVENUE_FROM_OPERATIONS.ref, m(d.revenue_from_operations)]),
        TableRow(["II", "Other Income", Note.OTHER_INCOME.ref, m(d.other_income)]),
        TableRow(["III", "Total Revenue (I+II)", "", m(d.total_revenue)]),
        _blank(4),
        TableRow(["IV", "Expenses:", "", ""], emphasized=True),
        TableRow(["", "   Cost of Materials Consumed", "", m(d.cost_of_materials)]),
        TableRow(["", "   Employee Benefit Expense", "", m(d.employee_benefit)]),
        TableRow(["", "   Financial Costs", "", m(d.financial_costs)]),
        TableRow(["", "   Depreciation and Amortization Expenses", "", m(d.depreciation)]),
        TableRow(["", "   Other Expenses", Note.OTHER_EXPENSES.ref, m(d.other_expenses)]),
        TableRow(["", "   Total Expenses (IV)", "", m(d.total_expenses)]),
        _blank(4),
        TableRow(["V", "Profit Before Exceptional and Extraordinary Items & Tax (III-IV)", "", m(d.profit_before_tax)]),
        TableRow(["", "Exceptional Items", "", DASH]),
        TableRow(["", "Profit Before Extraordinary Items And Tax", "", m(d.profit_before_tax)]),
        TableRow(["", "Extraordinary Items", "", DASH]),
        TableRow(["", "Profit/(Loss) Before Tax", "", m(d.profit_before_tax)]),
        _blank(4),
        TableRow(["VI", "Tax expense:", "", ""], emphasized=True),
        TableRow(["", "   Less: Current tax", "", m(d.tax_expense)]),
        TableRow(["", "   Add: Deferred tax", "", DASH]),
        _blank(4),
        TableRow(["VII", "Profit/(Loss) from continuing operations (V-VI)", "", m(d.profit_after_tax)]),
        TableRow(["", "Profit/(Loss) from discontinuing operations", "", DASH]),
        TableRow(["", "Tax Expense of Discontinuing Operations", "", DASH]),
        TableRow(["", "Profit/(Loss) from Discontinuing Operations (After Tax)", "", DASH]),
        _blank(4),
        TableRow(["VIII", "Profit/(Loss) for the period", "", m(d.profit_after_tax)]),
        _blank(4),
        TableRow(["IX", "Earning Per Share", "", ""], emphasized=True),
        TableRow(["", "   (1) Basic", "", eps]),
        TableRow(["", "   (2) Diluted", "", eps]),
    ]


def profit_and_loss(cursor: DocumentCursor, ctx: ReportContext) -> float:
    company_header(cursor, ctx)
    document_title(cursor, f"Profit and Loss Account for the year ended {ctx.year_end_label}")
    cursor.draw_table(
        TableSpec(
            head=["Sr.No", "Particulars", "Note No", ctx.fy_column],
            rows=profit_and_loss_rows(ctx),
            columns=columns(ctx, [0.8, 4.4, 0.9, 1.6], amounts=(3,), centered=(0, 2)),
            theme=TableTheme.plain(),
            label_column=1,
        )
    )
    statement_remarks(cursor, "Profit & Loss Statement")
    return signature_block(cursor, ctx)


def balance_sheet_rows(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    m = ctx.money
    return [
        TableRow(["I. EQUITY AND LIABILITIES", "", ""], emphasized=True),
        TableRow(["(1) Shareholder's Funds", "", ""]),
        TableRow(["    (a) Share Capital", Note.SHARE_CAPITAL.ref, m(d.share_capital)]),
        TableRow(["    (b) Reserves and Surplus", Note.RESERVES_AND_SURPLUS.ref, m(d.reserves_and_surplus)]),
        _blank(3),
        TableRow(["(2) Share Application money pending allotment", "", DASH]),
        _blank(3),
        TableRow(["(3) Non-Current Liabilities:", "", ""]),
        TableRow(["    (a) Long Term Borrowings", "", m(d.long_term_borrowings)]),
        TableRow(["    (b) Deferred Tax Liabilities (net)", "", DASH]),
        TableRow(["    (c) Other Long Term Liabilities", "", DASH]),
        TableRow(["    (d) Long Term Provisions", "", DASH]),
        _blank(3),
        TableRow(["(4) Current liabilities:", "", ""]),
        TableRow(["    (a) Short-term borrowings", "", m(d.short_term_borrowings)]),
        TableRow(["    (b) Trade payables", "", m(d.trade_payables)]),
        TableRow(
            ["    (c) Other current liabilities", Note.OTHER_CURRENT_LIABILITIES.ref, m(d.other_current_liabilities)]
        ),
        TableRow(["    (d) Short-term provisions", "", DASH]),
        TableRow(["    Total Equity & Liabilities", "", m(d.total_liabilities)]),
        _blank(3),
        TableRow(["II. ASSETS", "", ""], emphasized=True),
        TableRow(["(1) Non-Current Assets", "", ""]),
        TableRow(["    (a) Property, Plant & Equipment", "", ""]),
        TableRow(["        (i) Gross Block", "", m(d.fixed_assets)]),
        TableRow(["        (ii) Depreciation", "", DASH]),
        TableRow(["        (iii) Net Block", "", m(d.fixed_assets)]),
        TableRow(["    (b) Non-current investments", "", DASH]),
        TableRow(["    (c) Deferred tax assets (net)", "", DASH]),
        TableRow(["    (d) Long term loans and advances", "", DASH]),
        TableRow(["    (e) Other Non-current assets", "", DASH]),
        _blank(3),
        TableRow(["(2) Current Assets", "", ""]),
        TableRow(["    (a) Current investments", "", DASH]),
        TableRow(["    (b) Inventories", "", DASH]),
        TableRow(["    (c) Trade receivables", "", m(d.trade_receivables)]),
        TableRow(["    (d) Cash and cash equivalents", Note.CASH_AND_CASH_EQUIVALENTS.ref, m(d.cash_and_bank)]),
        TableRow(["    (e) Short-term loans and advances", "", DASH]),
        TableRow(["    (f) Other current assets", "", DASH]),
        TableRow(["    Total Assets", "", m(d.total_assets)]),
    ]


def balance_sheet(cursor: DocumentCursor, ctx: ReportContext) -> float:
    company_header(cursor, ctx)
    document_title(cursor, f"Balance Sheet as at {ctx.year_end_label}")
    cursor.draw_table(
        TableSpec(
            head=["Particulars", "Note No", ctx.fy_column],
            rows=balance_sheet_rows(ctx),
            columns=columns(ctx, [5.2, 0.9, 1.6], amounts=(2,), centered=(1,)),
            theme=TableTheme.plain(),
        )
    )
    statement_remarks(cursor, "Balance Sheet")
    return signature_block(cursor, ctx)


def cash_flow_rows(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    m = ctx.money
    operating_profit = d.profit_before_tax + d.depreciation
    cash_generated = operating_profit - d.trade_receivables + d.trade_payables
    net_operating = cash_generated - d.tax_expense
    return [
        TableRow(["A. CASH FLOW FROM OPERATING ACTIVITIES", ""], emphasized=True),
        TableRow(["Net Profit Before Tax", m(d.profit_before_tax)]),
        TableRow(["Adjustments for:", ""]),
        TableRow(["   Depreciation", m(d.depreciation)]),
        TableRow(["   Interest Expense", m(d.financial_costs)]),
        TableRow(["Operating Profit Before Working Capital Changes", m(operating_profit)]),
        TableRow(["Changes in Working Capital:", ""]),
        TableRow(["   (Increase)/Decrease in Trade Receivables", m(-d.trade_receivables)]),
        TableRow(["   Increase/(Decrease) in Trade Payables", m(d.trade_payables)]),
        TableRow(["Cash Generated from Operations", m(cash_generated)]),
        TableRow(["   Less: Tax Paid", m(-d.tax_expense)]),
        TableRow(["Net Cash from Operating Activities (A)", m(net_operating)], emphasized=True),
        _blank(2),
        TableRow(["B. CASH FLOW FROM INVESTING ACTIVITIES", ""], emphasized=True),
        TableRow(["   Purchase of Fixed Assets", DASH]),
        TableRow(["   Sale of Fixed Assets", DASH]),
        TableRow(["Net Cash from Investing Activities (B)", DASH], emphasized=True),
        _blank(2),
        TableRow(["C. CASH FLOW FROM FINANCING ACTIVITIES", ""], emphasized=True),
        TableRow(["   Proceeds from Share Capital", DASH]),
        TableRow(["   Dividend Paid", DASH]),
        TableRow(["Net Cash from Financing Activities (C)", DASH], emphasized=True),
        _blank(2),
        TableRow(["Net Increase/(Decrease) in Cash (A+B+C)", m(d.cash_and_bank)], emphasized=True),
        TableRow(["Cash and Cash Equivalents - Opening", DASH]),
        TableRow(["Cash and Cash Equivalents - Closing", m(d.cash_and_bank)], emphasized=True),
    ]


def cash_flow(cursor: DocumentCursor, ctx: ReportContext) -> float:
    company_header(cursor, ctx)
    document_title(cursor, f"Cash Flow Statement for the year ended {ctx.year_end_label}", "(Indirect Method)")
    return cursor.draw_table(
        TableSpec(
            head=["Particulars", ctx.fy_column],
            rows=cash_flow_rows(ctx),
            columns=columns(ctx, [5.4, 1.6], amounts=(1,)),
            theme=TableTheme.plain(),
        )
    )
