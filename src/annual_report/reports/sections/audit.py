"""Compliance summary and the independent auditor's report."""
from __future__ import annotations

from annual_report.domain.models.financials import default_compliance_checklist
from annual_report.reports.document import DocumentCursor, TableRow, TableSpec, TableTheme
from annual_report.reports.sections.base import (
    FILED_COLOR,
    PENDING_COLOR,
    ReportContext,
    columns,
    section_title,
    signature_block,
)

STATUS_COLORS = {"filed": FILED_COLOR, "pending": PENDING_COLOR}
STATUS_COLUMN = 2

AUDIT_HEADINGS = (
    "Report on the Audit of Financial Statements",
    "Opinion",
    "Basis for Opinion",
    "Responsibilities of Management",
    "Auditor's Responsibilities",
)


def compliance_summary(cursor: DocumentCursor, ctx: ReportContext) -> float:
    section_title(cursor, "COMPLIANCE SUMMARY", f"Statutory filings for FY {ctx.fiscal_year.label}")
    items = ctx.compliance if ctx.compliance is not None else default_compliance_checklist(ctx.fiscal_year)
    rows = []
    for item in items:
        color = STATUS_COLORS.get(item.status.strip().lower())
        rows.append(
            TableRow(
                [item.name, item.period, item.status, item.date_filed, item.remarks],
                emphasized=False,
                cell_colors={STATUS_COLUMN: color} if color else None,
            )
        )
    return cursor.draw_table(
        TableSpec(
            head=["Compliance", "Period", "Status", "Date Filed", "Remarks"],
            rows=rows,
            columns=columns(ctx, [2.2, 2.0, 1.1, 1.2, 2.4], centered=(2, 3)),
            theme=TableTheme.dark_head(),
            font_size=cursor.layout.small_size,
        )
    )


def audit_certificate(cursor: DocumentCursor, ctx: ReportContext) -> float:
    section_title(cursor, "INDEPENDENT AUDITOR'S REPORT")
    paragraphs = ctx.prose().render_paragraphs(
        "audit_certificate.txt.j2", {"company": ctx.company, "fiscal_year": ctx.fiscal_year}
    )
    cursor.write_paragraphs(paragraphs, headings=AUDIT_HEADINGS)
    cursor.advance(cursor.layout.section_spacing)
    return signature_block(cursor, ctx, partner_details=True)
