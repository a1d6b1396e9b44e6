"""Convenience re-exports for the statutory section builders."""
from __future__ import annotations

from .audit import audit_certificate, compliance_summary
from .base import Note, ReportContext, SectionBuilder
from .front_matter import cover, directors_report, financial_highlights, table_of_contents
from .notes import notes_to_accounts
from .statements import balance_sheet, cash_flow, profit_and_loss
from .tax_schedules import computation_of_income, tds_summary

__all__ = [
    "Note",
    "ReportContext",
    "SectionBuilder",
    "cover",
    "table_of_contents",
    "directors_report",
    "financial_highlights",
    "profit_and_loss",
    "balance_sheet",
    "cash_flow",
    "notes_to_accounts",
    "computation_of_income",
    "tds_summary",
    "compliance_summary",
    "audit_certificate",
]
