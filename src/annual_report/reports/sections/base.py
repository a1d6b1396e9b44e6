"""Shared context and drawing helpers for the statutory section builders."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

from annual_report.domain.models.financials import (
    AuditorInfo,
    CompanyInfo,
    ComplianceItem,
    FinancialData,
    FiscalYear,
)
from annual_report.domain.services.tax import FlatRateTaxPolicy, TaxPolicy
from annual_report.reports.document import DocumentCursor, TableRow, TableSpec, TableTheme
from annual_report.reports.formatting import ColumnStyle, compute_column_styles, format_currency
from annual_report.reports.layout import ReportLayoutConfig
from annual_report.reports.renderer import ReportRenderer


class Note(IntEnum):
    """Note numbers referenced by the statements and used as Notes to Accounts headings."""

    SHARE_CAPITAL = 1
    RESERVES_AND_SURPLUS = 2
    OTHER_CURRENT_LIABILITIES = 3
    CASH_AND_CASH_EQUIVALENTS = 4
    REVENUE_FROM_OPERATIONS = 5
    OTHER_INCOME = 6
    OTHER_EXPENSES = 7

    @property
    def title(self) -> str:
        return NOTE_TITLES[self]

    @property
    def heading(self) -> str:
        return f"Note {int(self)}: {self.title}"

    @property
    def ref(self) -> str:
        return str(int(self))


NOTE_TITLES = {
    Note.SHARE_CAPITAL: "Share Capital",
    Note.RESERVES_AND_SURPLUS: "Reserves & Surplus",
    Note.OTHER_CURRENT_LIABILITIES: "Other Current Liabilities",
    Note.CASH_AND_CASH_EQUIVALENTS: "Cash and Cash Equivalents",
    Note.REVENUE_FROM_OPERATIONS: "Revenue from Operations",
    Note.OTHER_INCOME: "Other Income",
    Note.OTHER_EXPENSES: "Other Expenses",
}

FILED_COLOR = "#008000"
PENDING_COLOR = "#FFA500"


@dataclass(frozen=True)
class ReportContext:
    """Everything a section builder reads; builders never mutate it."""

    company: CompanyInfo
    data: FinancialData
    fiscal_year: FiscalYear
    layout: ReportLayoutConfig = field(default_factory=ReportLayoutConfig)
    tax_policy: TaxPolicy = field(default_factory=FlatRateTaxPolicy)
    auditor: AuditorInfo = field(default_factory=AuditorInfo)
    previous: Optional[FinancialData] = None
    compliance: Optional[Sequence[ComplianceItem]] = None
    # (title, page) in table-of-contents order; page is None during the dry run
    toc_pages: Sequence[Tuple[str, Optional[int]]] = ()
    generated_on: date = field(default_factory=date.today)
    share_face_value: float = 10.0
    renderer: Optional[ReportRenderer] = None

    def money(self, value) -> str:
        return format_currency(value, self.layout.number_grouping)

    @property
    def fy_column(self) -> str:
        return f"FY {self.fiscal_year.label}"

    @property
    def shares_outstanding(self) -> float:
        if not self.share_face_value:
            return 0.0
        return self.data.share_capital / self.share_face_value

    @property
    def year_end_label(self) -> str:
        return f"31ST MARCH {self.fiscal_year.end_year}"

    @property
    def signed_on(self) -> str:
        return self.generated_on.strftime("%d/%m/%Y")

    @property
    def place(self) -> str:
        return self.company.place or self.company.city or "-"

    def prose(self) -> ReportRenderer:
        return self.renderer or ReportRenderer(grouping=self.layout.number_grouping)


SectionBuilder = Callable[[DocumentCursor, ReportContext], float]


def columns(ctx: ReportContext, weights: Sequence[float], amounts=(), centered=()) -> List[ColumnStyle]:
    return compute_column_styles(ctx.layout.content_width, weights, amounts, centered)


def amount_table(
    ctx: ReportContext,
    rows: Sequence[TableRow],
    *,
    head: Optional[Sequence[str]] = None,
    theme: Optional[TableTheme] = None,
) -> TableSpec:
    """Sr. No / Particulars / amount layout used by every note schedule."""
    return TableSpec(
        head=head or ["Sr. No", "Particulars", ctx.fy_column],
        rows=rows,
        columns=columns(ctx, [0.8, 4.4, 1.6], amounts=(2,), centered=(0,)),
        theme=theme or TableTheme.plain(),
        label_column=1,
    )


def section_title(cursor: DocumentCursor, title: str, subtitle: str = "") -> float:
    cursor.write_heading(title)
    if subtitle:
        cursor.write_centered(subtitle, size=cursor.layout.small_size)
    return cursor.advance(cursor.layout.section_spacing / 2)


def company_header(cursor: DocumentCursor, ctx: ReportContext) -> float:
    """Company name, CIN and address centred above a statement."""
    layout = cursor.layout
    cursor.write_centered(ctx.company.company_name.upper(), size=layout.subheader_size, bold=True)
    if ctx.company.cin:
        cursor.write_centered(f"CIN: {ctx.company.cin}", size=layout.small_size)
    if ctx.company.full_address:
        cursor.write_centered(ctx.company.full_address, size=layout.small_size)
    return cursor.advance(layout.section_spacing / 2)


def document_title(cursor: DocumentCursor, title: str, subtitle: str = "") -> float:
    layout = cursor.layout
    cursor.ensure_space(layout.leading(layout.subheader_size) * 3)
    cursor.write_centered(title.upper(), size=layout.subheader_size, bold=True)
    if subtitle:
        cursor.write_centered(subtitle, size=layout.small_size)
    return cursor.advance(layout.section_spacing / 2)


def statement_remarks(cursor: DocumentCursor, statement: str) -> float:
    size = cursor.layout.small_size
    cursor.write_line("See accompanying notes forming part of financial statements", size=size)
    cursor.write_line(f"This is the {statement} referred to in our Report of even date.", size=size)
    return cursor.advance(cursor.layout.section_spacing / 2)


def signature_block(cursor: DocumentCursor, ctx: ReportContext, *, partner_details: bool = False) -> float:
    """Auditor on the left, the company's directors on the right, then place and date."""
    layout = cursor.layout
    doc = cursor.document
    size = layout.body_size
    leading = layout.leading(size)

    left: List[Tuple[str, bool]] = [(line, False) for line in ctx.auditor.signature_lines()]
    left += [("", False), ("____________________", False)]
    if partner_details:
        partner = ctx.auditor.partner_name
        left.append((f"Partner: {partner}" if partner else "Partner", False))
        if ctx.auditor.membership_number:
            left.append((f"Membership No: {ctx.auditor.membership_number}", False))

    right: List[Tuple[str, bool]] = [(f"For {ctx.company.company_name}", False), ("", False)]
    for name, _din in ctx.company.directors or [("", "")]:
        right += [("____________________", False), (name, True), ("Director", False)]

    trailer = [f"Place: {ctx.place}", f"Date: {ctx.signed_on}"]
    height = (max(len(left), len(right)) + 1 + len(trailer)) * leading
    cursor.ensure_space(height)

    top = cursor.y
    for index, (text, bold) in enumerate(left):
        if text:
            doc.draw_text(
                layout.content_left,
                top + index * leading + size,
                text,
                font=layout.font_bold if bold else layout.font_regular,
                size=size,
            )
    for index, (text, bold) in enumerate(right):
        if text:
            doc.draw_text(
                layout.content_right,
                top + index * leading + size,
                text,
                font=layout.font_bold if bold else layout.font_regular,
                size=size,
                align="right",
            )
    cursor.advance((max(len(left), len(right)) + 1) * leading)
    for line in trailer:
        cursor.write_line(line, size=layout.small_size)
    return cursor.y
