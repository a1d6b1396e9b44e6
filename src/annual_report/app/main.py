"""Console entry point for the annual report generator."""
from __future__ import annotations

from annual_report.cli.commands import app


def main() -> None:
    """Invoke the Typer application."""
    app()


if __name__ == "__main__":
    main()
