"""Workflow dependency container."""
from __future__ import annotations

from dataclasses import dataclass

from config import Config
from annual_report.domain.models.financials import AuditorInfo
from annual_report.domain.services.aggregation import FinancialAggregator
from annual_report.infrastructure.db.ledger import LedgerRepository
from annual_report.reports.layout import ReportLayoutConfig


@dataclass
class WorkflowContext:
    """Holds dependencies shared by LangGraph nodes."""

    config: Config
    repository: LedgerRepository
    aggregator: FinancialAggregator
    layout: ReportLayoutConfig
    auditor: AuditorInfo

    def close(self) -> None:
        """Release pooled database connections."""
        self.repository.engine.dispose()
