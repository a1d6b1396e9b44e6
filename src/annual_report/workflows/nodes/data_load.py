"""LangGraph node loading company details and ledger records from the ledger store."""
from __future__ import annotations

from annual_report.domain.errors import DataUnavailable
from annual_report.workflows.context import WorkflowContext
from annual_report.workflows.state import ReportState


def run(state: ReportState, context: WorkflowContext) -> ReportState:
    """Populate company details and ledger records; failures propagate as ``DataUnavailable``."""
    logs = state.setdefault("logs", [])
    fiscal_year = state["fiscal_year"]
    user_id = state.get("user_id")
    if not user_id:
        raise DataUnavailable("No ledger user configured; pass --user-id or set LEDGER_USER_ID.", source="config")

    logs.append(f"DataLoad -> company details for {user_id}")
    company = context.repository.fetch_company_details(user_id)
    state["company"] = company.with_owner(state.get("owner_name"))

    logs.append(f"DataLoad -> ledger records for FY {fiscal_year.label}")
    ledger = context.repository.fetch_ledger(user_id, fiscal_year)
    state["ledger"] = ledger
    logs.append(
        "DataLoad -> {} invoices, {} expenses, {} journals, {} TDS rows".format(
            len(ledger.invoices), len(ledger.expenses), len(ledger.journals), len(ledger.tds_transactions)
        )
    )

    if context.config.include_previous_year:
        previous = fiscal_year.previous()
        state["previous_ledger"] = context.repository.fetch_ledger(user_id, previous)
        logs.append(f"DataLoad -> comparison ledger for FY {previous.label}")
    return state
