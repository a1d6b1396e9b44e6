"""Workflow state definitions shared by LangGraph nodes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from annual_report.domain.models.financials import (
    CompanyInfo,
    FinancialData,
    FiscalYear,
    LedgerRecords,
)
from annual_report.reports.document import ReportDocument


class ReportState(TypedDict, total=False):
    fiscal_year: FiscalYear
    user_id: str
    owner_name: Optional[str]
    report_date: str
    document_kind: str

    company: CompanyInfo
    ledger: LedgerRecords
    previous_ledger: Optional[LedgerRecords]

    financials: FinancialData
    previous_financials: Optional[FinancialData]

    document: ReportDocument
    pdf_bytes: bytes
    page_count: int
    sections: List[Dict[str, Any]]
    stage_order: List[str]

    logs: List[str]
    errors: List[str]
