"""Document composer: runs the section builders in statutory order and stamps footers.

When the document has a contents page, composition happens twice. The
first pass lays the report out with placeholder table-of-contents entries to
learn the first page of every section; the second pass renders the real
contents page with those numbers. The contents page has a fixed number of
rows, so both passes paginate identically.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Optional, Sequence

from annual_report.domain.errors import BalanceSheetMismatch
from annual_report.domain.models.financials import (
    AuditorInfo,
    CompanyInfo,
    ComplianceItem,
    FinancialData,
    FiscalYear,
)
from annual_report.domain.services.tax import FlatRateTaxPolicy, TaxPolicy
from annual_report.reports.document import DocumentCursor, ReportDocument
from annual_report.reports.layout import ReportLayoutConfig
from annual_report.reports.registry import (
    CONTENTS_KEY,
    SectionSpec,
    build_default_sections,
    build_financial_statements_sections,
)
from annual_report.reports.renderer import ReportRenderer
from annual_report.reports.sections import ReportContext

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 0.5


def _render(sections: Sequence[SectionSpec], ctx: ReportContext, title: str) -> ReportDocument:
    document = ReportDocument(ctx.layout, title=f"{ctx.company.company_name} - {title} {ctx.fiscal_year.label}")
    cursor = DocumentCursor(document)
    for index, spec in enumerate(sections):
        if index:
            cursor.new_page()
        document.mark_section(spec.key, spec.title)
        spec.builder(cursor, ctx)
    return document


def stamp_footer(document: ReportDocument, ctx: ReportContext) -> None:
    """Auditor block left, company and directors right, page number centred, on every page."""
    layout = document.layout
    size = layout.small_size
    leading = layout.leading(size)
    top = layout.footer_top + layout.section_spacing
    total = document.page_count

    right = [(f"For {ctx.company.company_name.upper()}", True)]
    for name, din in ctx.company.directors:
        right.append((name.upper(), True))
        if din:
            right.append((f"DIN : {din}", False))
    auditor_lines = ctx.auditor.signature_lines()
    # page number sits on the first row below both signature blocks
    number_row = max(len(right), len(auditor_lines))

    for number in range(1, total + 1):
        document.set_page(number)
        document.draw_line(layout.content_left, layout.footer_top + 4, layout.content_right, layout.footer_top + 4, width=0.3)
        for index, line in enumerate(auditor_lines):
            document.draw_text(layout.content_left, top + index * leading, line, size=size)
        for index, (line, bold) in enumerate(right):
            document.draw_text(
                layout.content_right,
                top + index * leading,
                line,
                font=layout.font_bold if bold else layout.font_regular,
                size=size,
                align="right",
            )
        document.draw_text(
            layout.content_left + layout.content_width / 2,
            top + number_row * leading,
            f"Page {number} of {total}",
            size=size,
            align="center",
        )
    if total:
        document.set_page(total)


def _compose(
    company: CompanyInfo,
    data: FinancialData,
    fiscal_year: Any,
    *,
    sections: Sequence[SectionSpec],
    title: str,
    layout: Optional[ReportLayoutConfig] = None,
    tax_policy: Optional[TaxPolicy] = None,
    auditor: Optional[AuditorInfo] = None,
    previous: Optional[FinancialData] = None,
    compliance: Optional[Sequence[ComplianceItem]] = None,
    strict_balance: bool = False,
    generated_on: Optional[date] = None,
    share_face_value: float = 10.0,
) -> ReportDocument:
    fiscal_year = FiscalYear.parse(fiscal_year)
    if not data.is_balanced(BALANCE_TOLERANCE):
        if strict_balance:
            raise BalanceSheetMismatch(data.total_assets, data.total_liabilities)
        logger.warning(
            "Composing FY %s with an unbalanced balance sheet (difference %.2f)",
            fiscal_year.label,
            data.balance_difference,
        )

    layout = layout or ReportLayoutConfig()
    ctx = ReportContext(
        company=company,
        data=data,
        fiscal_year=fiscal_year,
        layout=layout,
        tax_policy=tax_policy or FlatRateTaxPolicy(),
        auditor=auditor or AuditorInfo(),
        previous=previous,
        compliance=compliance,
        toc_pages=[(spec.title, None) for spec in sections if spec.in_toc],
        generated_on=generated_on or date.today(),
        share_face_value=share_face_value,
        renderer=ReportRenderer(grouping=layout.number_grouping),
    )

    document = _render(sections, ctx, title)
    if any(spec.key == CONTENTS_KEY for spec in sections):
        pages = document.section_pages()
        ctx = replace(ctx, toc_pages=[(spec.title, pages[spec.key]) for spec in sections if spec.in_toc])
        document = _render(sections, ctx, title)
        if document.section_pages() != pages:
            logger.warning("Section pages moved between composition passes: %s -> %s", pages, document.section_pages())

    stamp_footer(document, ctx)
    logger.info(
        "Composed FY %s %s for %s: %d pages, %d sections",
        fiscal_year.label,
        title.lower(),
        company.company_name,
        document.page_count,
        len(document.sections),
    )
    return document


def compose_annual_report(
    company: CompanyInfo,
    data: FinancialData,
    fiscal_year: Any,
    *,
    sections: Optional[Sequence[SectionSpec]] = None,
    **options: Any,
) -> ReportDocument:
    """Compose the full annual report into a fresh ``ReportDocument``; performs no I/O.

    ``options`` are the shared composition settings: ``layout``, ``tax_policy``,
    ``auditor``, ``previous``, ``compliance``, ``strict_balance``,
    ``generated_on`` and ``share_face_value``.
    """
    return _compose(
        company,
        data,
        fiscal_year,
        sections=list(sections or build_default_sections()),
        title="Annual Report",
        **options,
    )


def compose_financial_statements(
    company: CompanyInfo,
    data: FinancialData,
    fiscal_year: Any,
    **options: Any,
) -> ReportDocument:
    """Compose the shorter financial statements pack: computation, P&L, balance sheet and notes."""
    return _compose(
        company,
        data,
        fiscal_year,
        sections=build_financial_statements_sections(),
        title="Financial Statements",
        **options,
    )


ANNUAL_REPORT = "annual_report"
FINANCIAL_STATEMENTS = "financial_statements"
COMPOSERS = {
    ANNUAL_REPORT: compose_annual_report,
    FINANCIAL_STATEMENTS: compose_financial_statements,
}
