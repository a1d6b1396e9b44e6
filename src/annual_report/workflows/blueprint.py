"""Workflow blueprint describing report stages and their handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, TYPE_CHECKING

from annual_report.workflows.nodes import aggregate, compose, data_load, serialize

if TYPE_CHECKING:
    from annual_report.workflows.context import WorkflowContext
    from annual_report.workflows.state import ReportState


@dataclass
class StageSpec:
    """Single LangGraph stage definition."""

    key: str
    description: str
    handler: Callable[["ReportState", "WorkflowContext"], "ReportState"]
    depends_on: List[str] = field(default_factory=list)


def build_default_stages() -> List[StageSpec]:
    """Return the ordered stages for the report workflow."""
    return [
        StageSpec(
            key="load_ledger",
            description="Load company details and fiscal-year ledger records from the ledger database.",
            handler=data_load.run,
        ),
        StageSpec(
            key="aggregate",
            description="Reduce ledger records into revenue, expense, profit and balance-sheet figures.",
            handler=aggregate.run,
            depends_on=["load_ledger"],
        ),
        StageSpec(
            key="compose",
            description="Lay out the statutory sections, contents page numbers and footers.",
            handler=compose.run,
            depends_on=["aggregate"],
        ),
        StageSpec(
            key="serialize",
            description="Replay the composed pages onto a ReportLab canvas and check the PDF header.",
            handler=serialize.run,
            depends_on=["compose"],
        ),
    ]
