"""Cover, contents, Director's Report and Financial Highlights."""
from __future__ import annotations

import logging

from annual_report.reports.charts import highlights_bar_chart
from annual_report.reports.document import DocumentCursor, TableRow, TableSpec, TableTheme
from annual_report.reports.sections.base import ReportContext, columns, section_title

logger = logging.getLogger(__name__)

DIRECTORS_REPORT_HEADINGS = (
    "FINANCIAL SUMMARY:",
    "OPERATIONS:",
    "DIVIDEND:",
    "DIRECTORS RESPONSIBILITY STATEMENT:",
    "ACKNOWLEDGEMENTS:",
)


def cover(cursor: DocumentCursor, ctx: ReportContext) -> float:
    layout = cursor.layout
    fy = ctx.fiscal_year
    cursor.move_to(layout.page_height / 3 - layout.title_size)
    cursor.write_centered(ctx.company.company_name.upper(), size=layout.title_size, bold=True)
    cursor.advance(layout.section_spacing)
    cursor.write_centered("ANNUAL REPORT", size=layout.header_size + 3)
    cursor.advance(layout.section_spacing / 2)
    cursor.write_centered(
        f"Financial Year {fy.label} (April {fy.start_year} - March {fy.end_year})", size=layout.subheader_size
    )

    lines = []
    if ctx.company.full_address:
        lines.append(ctx.company.full_address)
    if ctx.company.gst_number:
        lines.append(f"GSTIN: {ctx.company.gst_number}")
    if ctx.company.cin:
        lines.append(f"CIN: {ctx.company.cin}")
    if lines:
        block = len(lines) * layout.leading(layout.body_size)
        cursor.move_to(max(cursor.y, layout.content_bottom - block - layout.section_spacing))
        for line in lines:
            cursor.write_centered(line)
    return cursor.y


def table_of_contents(cursor: DocumentCursor, ctx: ReportContext) -> float:
    section_title(cursor, "TABLE OF CONTENTS")
    rows = [
        TableRow([f"{index}. {title}", str(page) if page else "-"], emphasized=False)
        for index, (title, page) in enumerate(ctx.toc_pages, start=1)
    ]
    spec = TableSpec(
        head=["Section", "Page"],
        rows=rows,
        columns=columns(ctx, [5.0, 1.0], amounts=(1,)),
        theme=TableTheme.plain(),
        font_size=cursor.layout.body_size,
    )
    return cursor.draw_table(spec)


def directors_report(cursor: DocumentCursor, ctx: ReportContext) -> float:
    section_title(cursor, "DIRECTOR'S REPORT")
    paragraphs = ctx.prose().render_paragraphs(
        "directors_report.txt.j2",
        {"company": ctx.company, "data": ctx.data, "fiscal_year": ctx.fiscal_year},
    )
    cursor.write_paragraphs(paragraphs, headings=DIRECTORS_REPORT_HEADINGS)

    layout = cursor.layout
    leading = layout.leading(layout.body_size)
    directors = ctx.company.directors or [("", "")]
    cursor.ensure_space(leading * (2 + 4 * len(directors)))
    cursor.advance(leading)
    cursor.write_line(f"For {ctx.company.company_name}")
    for name, din in directors:
        cursor.advance(leading * 1.5)
        cursor.write_line(name or "____________________", bold=True)
        cursor.write_line(f"Director (DIN: {din})" if din else "Director")
    return cursor.y


HIGHLIGHT_ROWS = (
    ("Revenue from Operations", "revenue_from_operations"),
    ("Other Income", "other_income"),
    ("Total Revenue", "total_revenue"),
    ("Total Expenses", "total_expenses"),
    ("Profit Before Tax", "profit_before_tax"),
    ("Tax Expense", "tax_expense"),
    ("Profit After Tax", "profit_after_tax"),
    None,
    ("Total Assets", "total_assets"),
    ("Total Liabilities", "total_liabilities"),
)
# The ledger keeps current balances only, so a prior-year balance would repeat this year's figure.
POINT_IN_TIME = frozenset({"total_assets", "total_liabilities"})


def financial_highlights(cursor: DocumentCursor, ctx: ReportContext) -> float:
    section_title(cursor, "FINANCIAL HIGHLIGHTS", f"For the Financial Year {ctx.fiscal_year.label}")
    rows = []
    for entry in HIGHLIGHT_ROWS:
        if entry is None:
            rows.append(TableRow(["", "", ""], emphasized=False))
            continue
        label, attr = entry
        if ctx.previous is None or attr in POINT_IN_TIME:
            previous = "-"
        else:
            previous = ctx.money(getattr(ctx.previous, attr))
        rows.append(TableRow([label, ctx.money(getattr(ctx.data, attr)), previous]))
    previous_head = f"FY {ctx.fiscal_year.previous().label}" if ctx.previous is not None else "Previous FY"
    cursor.draw_table(
        TableSpec(
            head=["Particulars", ctx.fy_column, previous_head],
            rows=rows,
            columns=columns(ctx, [3.2, 2.0, 2.0], amounts=(1, 2)),
            theme=TableTheme.dark_head(),
        )
    )

    data = ctx.data
    chart = highlights_bar_chart(
        [data.total_revenue, data.total_expenses, data.profit_after_tax],
        ["Revenue", "Expenses", "Profit"],
        title=f"FY {ctx.fiscal_year.label}",
        grouping=ctx.layout.number_grouping,
    )
    width = cursor.layout.content_width * 0.8
    cursor.advance(cursor.layout.section_spacing / 2)
    return cursor.draw_image(chart, width, width * 2.8 / 6.0)
