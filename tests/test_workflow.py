"""End-to-end runs of the LangGraph report workflow against a seeded SQLite ledger."""
from __future__ import annotations

import pytest

from config import Config
from annual_report.domain.errors import DataUnavailable, InvalidFiscalYear
from annual_report.workflows.graph import ReportWorkflow


def make_workflow(database_url, tmp_path, **overrides):
    config = Config(database_url=database_url, output_dir=tmp_path, user_id="user-1", **overrides)
    return ReportWorkflow(config)


def test_workflow_stages():
    stages = ReportWorkflow.stage_descriptions()
    assert [stage.split(":")[0] for stage in stages] == ["load_ledger", "aggregate", "compose", "serialize"]


def test_workflow_produces_pdf(seeded_repository, database_url, tmp_path):
    workflow = make_workflow(database_url, tmp_path)
    try:
        state = workflow.run("2024-25", "Anita Rao")
    finally:
        workflow.close()

    assert state["pdf_bytes"].startswith(b"%PDF")
    assert state["financials"].profit_after_tax == pytest.approx(262500.0)
    assert state["company"].owner_name == "Anita Rao"
    assert state["page_count"] == state["document"].page_count
    assert [section["key"] for section in state["sections"]][:2] == ["cover", "table_of_contents"]
    assert state["stage_order"] == ["load_ledger", "aggregate", "compose", "serialize"]
    assert state["errors"] == []
    assert any(entry.startswith("Serialize ->") for entry in state["logs"])


def test_previous_year_is_aggregated_when_it_has_activity(seeded_repository, database_url, tmp_path):
    workflow = make_workflow(database_url, tmp_path)
    try:
        state = workflow.run("2024-25")
    finally:
        workflow.close()
    previous = state["previous_financials"]
    assert previous is not None
    assert previous.total_revenue == pytest.approx(70000.0)


def test_previous_year_can_be_disabled(seeded_repository, database_url, tmp_path):
    workflow = make_workflow(database_url, tmp_path, include_previous_year=False)
    try:
        state = workflow.run("2024-25")
    finally:
        workflow.close()
    assert state.get("previous_financials") is None


def test_missing_user_fails_loudly(seeded_repository, database_url, tmp_path):
    workflow = make_workflow(database_url, tmp_path)
    try:
        with pytest.raises(DataUnavailable):
            workflow.run("2024-25", user_id="stranger")
        with pytest.raises(InvalidFiscalYear):
            workflow.run("2024-27")
    finally:
        workflow.close()


def test_workflow_composes_financial_statements(seeded_repository, database_url, tmp_path):
    workflow = make_workflow(database_url, tmp_path)
    try:
        state = workflow.run("2024-25", document_kind="financial_statements")
        with pytest.raises(ValueError):
            workflow.run("2024-25", document_kind="brochure")
    finally:
        workflow.close()

    assert state["pdf_bytes"].startswith(b"%PDF")
    assert [section["key"] for section in state["sections"]] == [
        "computation_of_income",
        "profit_and_loss",
        "balance_sheet",
        "notes_to_accounts",
    ]
    assert any(entry.startswith("Compose financial_statements ->") for entry in state["logs"])
