"""Typed errors surfaced by the report pipeline."""
from __future__ import annotations


class ReportError(Exception):
    """Base class for every failure raised while producing a report."""


class InvalidFiscalYear(ReportError, ValueError):
    """Raised when a fiscal-year identifier cannot be parsed."""


class DataUnavailable(ReportError, RuntimeError):
    """Raised when the ledger data source cannot supply the records."""

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class BalanceSheetMismatch(ReportError, ValueError):
    """Raised in strict mode when total assets differ from total liabilities."""

    def __init__(self, total_assets: float, total_liabilities: float) -> None:
        super().__init__(
            f"Balance sheet does not balance: assets {total_assets:,.2f} "
            f"vs equity & liabilities {total_liabilities:,.2f}"
        )
        self.total_assets = total_assets
        self.total_liabilities = total_liabilities


class LayoutOverflow(ReportError, RuntimeError):
    """Raised when a block cannot be placed even on an empty page."""


class InvalidDocument(ReportError, RuntimeError):
    """Raised when serialized output is not a valid PDF byte stream."""
