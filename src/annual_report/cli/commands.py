"""CLI command definitions for the annual report generator."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from config import Config
from annual_report.domain.errors import ReportError
from annual_report.domain.models.financials import FiscalYear
from annual_report.infrastructure.db.ledger import LedgerRepository
from annual_report.reports.composer import ANNUAL_REPORT, FINANCIAL_STATEMENTS
from annual_report.reports.output import default_report_filename, write_report
from annual_report.reports.registry import build_default_sections, build_financial_statements_sections
from annual_report.settings.loader import load_settings
from annual_report.utils.logging import configure_logging
from annual_report.workflows.graph import ReportWorkflow
from annual_report.workflows.state import ReportState

console = Console()
app = typer.Typer(help="Generate statutory annual reports and financial statement PDFs from a ledger database.")


@dataclass
class AppContext:
    """Holds process-wide configuration for CLI commands."""

    config: Config

    def build_workflow(self, **overrides) -> ReportWorkflow:
        """Wire a workflow against the configuration plus non-empty overrides."""
        config = replace(self.config, **{key: value for key, value in overrides.items() if value is not None})
        config.ensure_directories()
        return ReportWorkflow(config=config)


def _init_context(debug_override: Optional[bool] = None, output_dir: Optional[Path] = None) -> AppContext:
    """Create a context with configuration and logging."""
    config = load_settings(debug_override, output_dir=output_dir)
    configure_logging(debug=config.debug)
    return AppContext(config=config)


@app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        help="Temporarily toggle verbose logging without touching environment variables.",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        help="Directory for generated PDFs (defaults to OUTPUT_DIR).",
    ),
) -> None:
    """Attach the application context to Typer."""
    ctx.obj = _init_context(debug_override=debug, output_dir=output_dir)


def _generate_one(
    workflow: ReportWorkflow,
    fiscal_year: FiscalYear,
    owner_name: Optional[str],
    user_id: Optional[str],
    output: Optional[Path],
    output_dir: Path,
    document_kind: str = ANNUAL_REPORT,
) -> Path:
    with console.status(f"[bold cyan]Composing FY {fiscal_year.label}..."):
        result = workflow.run(fiscal_year, owner_name, user_id=user_id, document_kind=document_kind)
    company_name = result["company"].company_name
    target = output or output_dir / default_report_filename(fiscal_year, company_name, document_kind)
    # write_report saves a .failed.txt sidecar before raising on a non-PDF payload
    path = write_report(result["pdf_bytes"], target)
    _print_run_summary(result, path)
    return path


@app.command()
def generate(
    ctx: typer.Context,
    fiscal_year: str = typer.Argument(..., help="Fiscal year, e.g. 2024-25 or 2024"),
    owner_name: Optional[str] = typer.Argument(None, help="Overrides the owner / first director name."),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Ledger user whose books are reported."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Target PDF path."),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL of the ledger database."),
    strict_balance: Optional[bool] = typer.Option(
        None,
        "--strict-balance/--lenient-balance",
        help="Fail instead of warning when the balance sheet does not balance.",
    ),
    statements_only: bool = typer.Option(
        False,
        "--statements-only",
        help="Write only the financial statements: computation of income, P&L, balance sheet and notes.",
    ),
) -> None:
    """Run the report workflow for one fiscal year and write the PDF."""
    if ctx.obj is None:
        raise typer.Exit(code=1)

    context: AppContext = ctx.obj
    try:
        fy = FiscalYear.parse(fiscal_year)
        kind = FINANCIAL_STATEMENTS if statements_only else ANNUAL_REPORT
        label = "Financial statements" if statements_only else "Annual report"
        console.rule(f"{label} FY {fy.label}")
        workflow = context.build_workflow(database_url=database_url, strict_balance=strict_balance)
        try:
            path = _generate_one(workflow, fy, owner_name, user_id, output, context.config.output_dir, kind)
        finally:
            workflow.close()
    except ReportError as exc:
        console.print(f"[bold red]Report generation failed:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{label} written to {path}[/bold green]")


@app.command()
def batch(
    ctx: typer.Context,
    fiscal_years: List[str] = typer.Argument(..., help="One or more fiscal years, e.g. 2023-24 2024-25"),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Ledger user whose books are reported."),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL of the ledger database."),
) -> None:
    """Generate reports for several fiscal years sequentially."""
    if ctx.obj is None:
        raise typer.Exit(code=1)
    context: AppContext = ctx.obj
    failures = []
    workflow = context.build_workflow(database_url=database_url)
    try:
        for value in fiscal_years:
            console.rule(f"Batch FY {value}")
            try:
                fy = FiscalYear.parse(value)
                path = _generate_one(workflow, fy, None, user_id, None, context.config.output_dir)
            except ReportError as exc:
                failures.append(value)
                console.print(f"[yellow]FY {value} failed: {exc}[/yellow]")
                continue
            console.print(f"Annual report written to {path}")
    finally:
        workflow.close()
    if failures:
        console.print(f"[bold red]{len(failures)} of {len(fiscal_years)} reports failed.[/bold red]")
        raise typer.Exit(code=1)


@app.command()
def plan(ctx: typer.Context) -> None:
    """Display the statutory section order and workflow stages."""
    if ctx.obj is None:
        raise typer.Exit(code=1)

    table = Table(title="Report Sections")
    table.add_column("Step", style="cyan")
    table.add_column("Section")
    table.add_column("In Contents")
    for idx, spec in enumerate(build_default_sections(), start=1):
        table.add_row(str(idx), spec.title, "yes" if spec.in_toc else "no")
    console.print(table)

    statements = Table(title="Financial Statements (--statements-only)")
    statements.add_column("Step", style="cyan")
    statements.add_column("Section")
    for idx, spec in enumerate(build_financial_statements_sections(), start=1):
        statements.add_row(str(idx), spec.title)
    console.print(statements)

    stages = Table(title="Workflow Stages")
    stages.add_column("Step", style="cyan")
    stages.add_column("Description")
    for idx, stage in enumerate(ReportWorkflow.stage_descriptions(), start=1):
        stages.add_row(str(idx), stage)
    console.print(stages)


@app.command("init-db")
def init_db(
    ctx: typer.Context,
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL of the ledger database."),
) -> None:
    """Create the ledger tables in the configured database."""
    if ctx.obj is None:
        raise typer.Exit(code=1)
    context: AppContext = ctx.obj
    config = replace(context.config, database_url=database_url or context.config.database_url)
    config.ensure_directories()
    try:
        repository = LedgerRepository(config.database_url, echo=config.sqlite_echo)
    except ReportError as exc:
        console.print(f"[bold red]Could not initialise ledger database:[/bold red] {exc}")
        raise typer.Exit(code=1)
    repository.engine.dispose()
    console.print(f"Ledger schema ready at {config.database_url}")


def _print_run_summary(state: ReportState, path: Path) -> None:
    """Pretty-print a short run summary for operators."""
    data = state["financials"]
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key")
    table.add_column("Value")

    table.add_row("Company", state["company"].company_name)
    table.add_row("Fiscal Year", state["fiscal_year"].label)
    table.add_row("Total Revenue", f"{data.total_revenue:,.2f}")
    table.add_row("Profit After Tax", f"{data.profit_after_tax:,.2f}")
    table.add_row("Balanced", "yes" if data.is_balanced() else "no")
    table.add_row("Pages", str(state.get("page_count", 0)))
    table.add_row("Output", str(path))
    table.add_row("Warnings", str(len(state.get("errors", []))))

    console.print(table)
