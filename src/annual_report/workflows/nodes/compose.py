"""LangGraph node composing the requested document."""
from __future__ import annotations

from annual_report.reports.composer import ANNUAL_REPORT, COMPOSERS
from annual_report.workflows.context import WorkflowContext
from annual_report.workflows.state import ReportState


def run(state: ReportState, context: WorkflowContext) -> ReportState:
    logs = state.setdefault("logs", [])
    config = context.config

    kind = state.get("document_kind") or ANNUAL_REPORT
    document = COMPOSERS[kind](
        state["company"],
        state["financials"],
        state["fiscal_year"],
        layout=context.layout,
        tax_policy=context.aggregator.tax_policy,
        auditor=context.auditor,
        previous=state.get("previous_financials"),
        strict_balance=config.strict_balance,
        share_face_value=config.share_face_value,
    )
    state["document"] = document
    state["page_count"] = document.page_count
    state["sections"] = [
        {"key": marker.key, "title": marker.title, "page": marker.page} for marker in document.sections
    ]
    logs.append(f"Compose {kind} -> {document.page_count} pages across {len(document.sections)} sections")
    return state
