"""LangGraph workflow assembly for the annual report pipeline."""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from langgraph.graph import END, StateGraph

from config import Config
from annual_report.domain.models.financials import AuditorInfo, FiscalYear
from annual_report.domain.services.aggregation import FinancialAggregator
from annual_report.domain.services.tax import FlatRateTaxPolicy
from annual_report.infrastructure.db.ledger import LedgerRepository
from annual_report.reports.composer import ANNUAL_REPORT, COMPOSERS
from annual_report.reports.layout import ReportLayoutConfig
from annual_report.workflows import context as context_module
from annual_report.workflows.blueprint import StageSpec, build_default_stages
from annual_report.workflows.state import ReportState


class ReportWorkflow:
    """Compose LangGraph nodes into a runnable workflow."""

    def __init__(self, config: Config, *, repository: Optional[LedgerRepository] = None) -> None:
        self._config = config
        self._context = self._build_context(repository)
        self._stages: List[StageSpec] = build_default_stages()
        self._graph = self._build_graph()

    @property
    def context(self) -> context_module.WorkflowContext:
        return self._context

    def _build_context(self, repository: Optional[LedgerRepository]) -> context_module.WorkflowContext:
        config = self._config
        repository = repository or LedgerRepository(config.database_url, echo=config.sqlite_echo)
        tax_policy = FlatRateTaxPolicy(rate=config.tax_rate, cess_rate=config.cess_rate)
        return context_module.WorkflowContext(
            config=config,
            repository=repository,
            aggregator=FinancialAggregator(tax_policy, share_capital=config.share_capital),
            layout=ReportLayoutConfig.from_config(config),
            auditor=AuditorInfo(
                firm_name=config.auditor_firm_name or "",
                firm_registration_number=config.auditor_frn or "",
                partner_name=config.auditor_partner or "",
                membership_number=config.auditor_membership_no or "",
            ),
        )

    def _build_graph(self):
        builder = StateGraph(dict)

        if not self._stages:
            raise RuntimeError("Workflow blueprint is empty; cannot build LangGraph.")

        for stage in self._stages:
            builder.add_node(stage.key, self._wrap(stage.handler))

        # Stages run strictly in declared order.
        builder.set_entry_point(self._stages[0].key)
        for current, nxt in zip(self._stages, self._stages[1:]):
            builder.add_edge(current.key, nxt.key)
        builder.add_edge(self._stages[-1].key, END)

        return builder.compile(checkpointer=None)

    def _wrap(self, func: Callable[[ReportState, context_module.WorkflowContext], ReportState]):
        def wrapper(state: Dict[str, Any]) -> Dict[str, Any]:
            return func(state, self._context)

        return wrapper

    def run(
        self,
        fiscal_year: Any,
        owner_name: Optional[str] = None,
        *,
        user_id: Optional[str] = None,
        document_kind: str = ANNUAL_REPORT,
    ) -> ReportState:
        """Execute the workflow for a single fiscal year."""
        if document_kind not in COMPOSERS:
            raise ValueError(f"Unknown document kind {document_kind!r}; choose from {sorted(COMPOSERS)}")
        fy = FiscalYear.parse(fiscal_year)
        initial_state: ReportState = {
            "fiscal_year": fy,
            "user_id": user_id or self._config.user_id or "",
            "owner_name": owner_name,
            "report_date": date.today().isoformat(),
            "document_kind": document_kind,
            "logs": [],
            "errors": [],
            "stage_order": [stage.key for stage in self._stages],
        }
        result: ReportState = self._graph.invoke(initial_state)
        return result  # type: ignore[return-value]

    def describe_stages(self) -> List[str]:
        """Return human-readable workflow stage descriptions."""
        return [f"{stage.key}: {stage.description}" for stage in self._stages]

    @staticmethod
    def stage_descriptions() -> List[str]:
        """Describe the default stages without wiring a database."""
        return [f"{stage.key}: {stage.description}" for stage in build_default_stages()]

    def close(self) -> None:
        self._context.close()
