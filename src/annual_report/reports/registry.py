"""Section registries declaring the fixed order of each generated document."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from annual_report.reports import sections
from annual_report.reports.sections import SectionBuilder

CONTENTS_KEY = "table_of_contents"


@dataclass(frozen=True)
class SectionSpec:
    """Single report section definition."""

    key: str
    title: str
    builder: SectionBuilder
    in_toc: bool = True


def build_default_sections() -> List[SectionSpec]:
    """Return the sections in the order they appear in the document."""
    return [
        SectionSpec("cover", "Cover", sections.cover, in_toc=False),
        SectionSpec(CONTENTS_KEY, "Table of Contents", sections.table_of_contents, in_toc=False),
        SectionSpec("directors_report", "Director's Report", sections.directors_report),
        SectionSpec("financial_highlights", "Financial Highlights", sections.financial_highlights),
        SectionSpec("profit_and_loss", "Profit & Loss Statement", sections.profit_and_loss),
        SectionSpec("balance_sheet", "Balance Sheet", sections.balance_sheet),
        SectionSpec("cash_flow", "Cash Flow Statement", sections.cash_flow),
        SectionSpec("notes_to_accounts", "Notes to Accounts", sections.notes_to_accounts),
        SectionSpec("computation_of_income", "Computation of Income", sections.computation_of_income),
        SectionSpec("tds_summary", "TDS & Tax Summary", sections.tds_summary),
        SectionSpec("compliance_summary", "Compliance Summary", sections.compliance_summary),
        SectionSpec("audit_certificate", "Audit Certificate", sections.audit_certificate),
    ]


def build_financial_statements_sections() -> List[SectionSpec]:
    """Sections of the standalone financial statements document, without cover or contents."""
    return [
        SectionSpec("computation_of_income", "Computation of Income", sections.computation_of_income),
        SectionSpec("profit_and_loss", "Profit & Loss Statement", sections.profit_and_loss),
        SectionSpec("balance_sheet", "Balance Sheet", sections.balance_sheet),
        SectionSpec("notes_to_accounts", "Notes to Accounts", sections.notes_to_accounts),
    ]
