"""Computation of total income and the TDS & tax summary."""
from __future__ import annotations

from typing import List

from annual_report.domain.services.tax import cess_label, rate_label
from annual_report.reports.document import DocumentCursor, TableRow, TableSpec, TableTheme
from annual_report.reports.sections.base import (
    ReportContext,
    columns,
    company_header,
    document_title,
    section_title,
    signature_block,
)

NO_TDS_ROW = ("", "No TDS transactions recorded", "", "")


def tax_liability(ctx: ReportContext) -> float:
    """Tax at the policy rate plus cess, as carried to the tax summary."""
    tax = ctx.tax_policy.estimate(ctx.data.profit_before_tax)
    return tax + ctx.tax_policy.cess(tax)


def computation_rows(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    m = ctx.money
    policy = ctx.tax_policy
    tax = policy.estimate(d.profit_before_tax)
    cess = policy.cess(tax)
    liability = tax + cess
    net = liability - d.total_tds
    return [
        TableRow(["Income From Business:", ""], emphasized=True),
        TableRow(["Net Profit as per Profit and Loss Account", m(d.profit_before_tax)], emphasized=False),
        TableRow(["Add: Dep. as per Companies Act, 2013", m(d.depreciation)]),
        TableRow(["Profit Before Depreciation", m(d.profit_before_tax + d.depreciation)], emphasized=False),
        TableRow(["Less: Dep. as per Income Tax Act, 1961", m(d.depreciation)]),
        TableRow(["Income From Business", m(d.profit_before_tax)], emphasized=True),
        TableRow(["", ""], emphasized=False),
        TableRow(["Gross Total Income", m(d.profit_before_tax)], emphasized=True),
        TableRow(["Less: Deductions under Chapter VI-A", "-"]),
        TableRow(["Net Total Income", m(d.profit_before_tax)], emphasized=True),
        TableRow(["", ""], emphasized=False),
        TableRow(["Tax on Total Income", ""], emphasized=True),
        TableRow([f"Income Tax @ {rate_label(policy)}", m(tax)]),
        TableRow(["Add: Surcharge", "-"]),
        TableRow([f"Add: Health & Education cess @ {cess_label(policy)}", m(cess)]),
        TableRow(["Total Tax Liability", m(liability)]),
        TableRow(["Less: TDS as per 26AS", m(d.total_tds)]),
        TableRow(["Net Tax Payable/(Refundable)", m(net)], emphasized=True),
    ]


def computation_of_income(cursor: DocumentCursor, ctx: ReportContext) -> float:
    company_header(cursor, ctx)
    company = ctx.company
    details = [
        ("PAN", company.pan or "-"),
        ("Date of Incorporation", company.date_of_incorporation or "-"),
        ("Status", "COMPANY"),
        ("Financial Year", ctx.fiscal_year.label),
        ("Assessment Year", ctx.fiscal_year.assessment_year),
    ]
    cursor.draw_table(
        TableSpec(
            head=None,
            rows=[TableRow([label, value], emphasized=False) for label, value in details],
            columns=columns(ctx, [2.0, 5.0]),
            theme=TableTheme.plain(),
            font_size=cursor.layout.small_size,
        )
    )
    document_title(cursor, "Computation of Total Income")
    cursor.write_line("(Amount in Rupees)", size=cursor.layout.small_size, align="right")
    cursor.draw_table(
        TableSpec(
            head=["Particulars", "Amount"],
            rows=computation_rows(ctx),
            columns=columns(ctx, [5.0, 1.8], amounts=(1,)),
            theme=TableTheme.plain(),
        )
    )
    return signature_block(cursor, ctx)


def tds_rows(ctx: ReportContext) -> List[TableRow]:
    if not ctx.data.tds_transactions:
        return [TableRow(NO_TDS_ROW, emphasized=False)]
    return [
        TableRow(
            [t.section, t.nature_of_payment, ctx.money(t.transaction_amount), ctx.money(t.tds_amount)],
            emphasized=False,
        )
        for t in ctx.data.tds_transactions
    ]


def tds_summary(cursor: DocumentCursor, ctx: ReportContext) -> float:
    layout = cursor.layout
    d = ctx.data
    section_title(cursor, "TDS & TAX SUMMARY")
    cursor.write_line("TDS Deducted During the Year", size=layout.subheader_size, bold=True)
    cursor.advance(layout.cell_padding)
    cursor.draw_table(
        TableSpec(
            head=["Section", "Nature of Payment", "Amount", "TDS Deducted"],
            rows=tds_rows(ctx),
            columns=columns(ctx, [1.0, 3.6, 1.6, 1.6], amounts=(2, 3), centered=(0,)),
            theme=TableTheme.dark_head(),
            label_column=1,
            font_size=layout.small_size,
        )
    )
    cursor.advance(layout.section_spacing / 2)

    liability = tax_liability(ctx)
    cursor.ensure_space(layout.leading(layout.subheader_size) * 4)
    cursor.write_line("Tax Summary", size=layout.subheader_size, bold=True)
    cursor.advance(layout.cell_padding)
    rows = [
        TableRow(["Total TDS Deducted", ctx.money(d.total_tds)]),
        TableRow(["Advance Tax Paid", "-"]),
        TableRow(["Self Assessment Tax", "-"]),
        TableRow(["Total Tax Paid", ctx.money(d.total_tds)]),
        TableRow(["", ""], emphasized=False),
        TableRow(["Tax Liability as per Computation", ctx.money(liability)]),
        TableRow(["Less: TDS/Advance Tax", ctx.money(d.total_tds)]),
        TableRow(["Net Tax Payable/(Refundable)", ctx.money(liability - d.total_tds)], emphasized=True),
    ]
    return cursor.draw_table(
        TableSpec(
            head=["Particulars", ctx.fy_column],
            rows=rows,
            columns=columns(ctx, [5.0, 1.8], amounts=(1,)),
            theme=TableTheme.light_head(),
            font_size=layout.small_size,
        )
    )
