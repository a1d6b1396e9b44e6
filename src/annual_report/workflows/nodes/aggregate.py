"""LangGraph node reducing ledger records into the report aggregate."""
from __future__ import annotations

from annual_report.workflows.context import WorkflowContext
from annual_report.workflows.state import ReportState


def run(state: ReportState, context: WorkflowContext) -> ReportState:
    logs = state.setdefault("logs", [])
    fiscal_year = state["fiscal_year"]

    data = context.aggregator.aggregate(state["ledger"], fiscal_year)
    state["financials"] = data
    logs.append(
        f"Aggregate -> revenue {data.total_revenue:,.2f}, expenses {data.total_expenses:,.2f}, "
        f"PAT {data.profit_after_tax:,.2f}"
    )
    if not data.is_balanced():
        logs.append(f"Aggregate -> balance sheet differs by {data.balance_difference:,.2f}")

    previous_ledger = state.get("previous_ledger")
    if previous_ledger is not None:
        previous = context.aggregator.aggregate(previous_ledger, fiscal_year.previous())
        # an empty prior year carries no comparison
        state["previous_financials"] = previous if previous.total_invoices or previous.total_expenses else None
    return state
