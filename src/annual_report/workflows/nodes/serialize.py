"""LangGraph node serializing the composed document into PDF bytes."""
from __future__ import annotations

from annual_report.reports.output import validate_pdf_bytes
from annual_report.workflows.context import WorkflowContext
from annual_report.workflows.state import ReportState


def run(state: ReportState, context: WorkflowContext) -> ReportState:
    """Store the PDF bytes; a missing header is flagged here and rejected by the output sink."""
    logs = state.setdefault("logs", [])
    payload = state["document"].to_pdf_bytes()
    state["pdf_bytes"] = payload
    if not validate_pdf_bytes(payload):
        state.setdefault("errors", []).append("Serialize -> output lacks the %PDF header")
    logs.append(f"Serialize -> {len(payload):,} bytes")
    return state
