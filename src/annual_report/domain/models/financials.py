"""Domain models describing the data exchanged between the aggregator and the report builders."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from annual_report.domain.errors import InvalidFiscalYear

_FY_PATTERN = re.compile(r"^\s*(?:FY\s*)?(\d{2}|\d{4})\s*(?:[-/]\s*(\d{2}|\d{4}))?\s*$", re.IGNORECASE)


def coerce_amount(value: Any) -> float:
    """Return a finite float for loosely typed ledger amounts; blanks become 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def coerce_date(value: Any) -> Optional[date]:
    """Parse dates, datetimes and ISO strings; anything else yields None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class FiscalYear:
    """April-to-March reporting window identified by its starting calendar year."""

    start_year: int

    @classmethod
    def parse(cls, value: Any) -> "FiscalYear":
        if isinstance(value, FiscalYear):
            return value
        match = _FY_PATTERN.match(str(value or ""))
        if not match:
            raise InvalidFiscalYear(f"Unrecognised fiscal year {value!r}; expected e.g. '2024-25'.")
        start_raw, end_raw = match.groups()
        start = int(start_raw) + (2000 if len(start_raw) == 2 else 0)
        if end_raw is not None:
            expected = start + 1
            end = int(end_raw)
            if (len(end_raw) == 2 and end != expected % 100) or (len(end_raw) == 4 and end != expected):
                raise InvalidFiscalYear(
                    f"Fiscal year {value!r} must span consecutive years (e.g. {start}-{str(expected)[-2:]})."
                )
        return cls(start_year=start)

    @property
    def end_year(self) -> int:
        return self.start_year + 1

    @property
    def start_date(self) -> date:
        return date(self.start_year, 4, 1)

    @property
    def end_date(self) -> date:
        return date(self.end_year, 3, 31)

    @property
    def label(self) -> str:
        return f"{self.start_year}-{str(self.end_year)[-2:]}"

    @property
    def assessment_year(self) -> str:
        return f"{self.end_year}-{str(self.end_year + 1)[-2:]}"

    def previous(self) -> "FiscalYear":
        return FiscalYear(self.start_year - 1)

    def contains(self, day: Optional[date]) -> bool:
        return day is not None and self.start_date <= day <= self.end_date

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class CompanyInfo:
    """Immutable per-report company metadata supplied by the caller."""

    company_name: str
    owner_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    place: str = ""
    gst_number: str = ""
    cin: str = ""
    pan: str = ""
    date_of_incorporation: str = ""
    director_din: str = ""
    second_director_name: str = ""
    second_director_din: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "CompanyInfo":
        values = {f.name: _text(row.get(f.name)) for f in fields(cls)}
        values["company_name"] = values["company_name"] or "COMPANY"
        return cls(**values)

    @property
    def full_address(self) -> str:
        parts = [self.address, self.city, self.state, self.pincode]
        return ", ".join(part for part in parts if part)

    @property
    def directors(self) -> List[Tuple[str, str]]:
        """Present directors as (name, DIN) pairs; blank names are skipped."""
        pairs = [(self.owner_name, self.director_din), (self.second_director_name, self.second_director_din)]
        return [(name, din) for name, din in pairs if name]

    def with_owner(self, owner_name: Optional[str]) -> "CompanyInfo":
        if not owner_name:
            return self
        return replace(self, owner_name=owner_name)


@dataclass(frozen=True)
class AuditorInfo:
    """Statutory auditor details printed in signature blocks and footers."""

    firm_name: str = ""
    firm_registration_number: str = ""
    partner_name: str = ""
    membership_number: str = ""

    def signature_lines(self) -> List[str]:
        lines = []
        if self.firm_name:
            lines.append(f"For {self.firm_name}")
        lines.append("Chartered Accountants")
        if self.firm_registration_number:
            lines.append(f"FRN {self.firm_registration_number}")
        return lines


# ------------------
# Raw ledger records
# ------------------


@dataclass(frozen=True)
class Invoice:
    invoice_date: Optional[date]
    amount: float = 0.0
    status: str = ""
    gst_amount: float = 0.0
    invoice_number: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Invoice":
        return cls(
            invoice_date=coerce_date(row.get("invoice_date")),
            amount=coerce_amount(row.get("amount")),
            status=_text(row.get("status")).lower(),
            gst_amount=coerce_amount(row.get("gst_amount")),
            invoice_number=_text(row.get("invoice_number")),
        )


@dataclass(frozen=True)
class Expense:
    expense_date: Optional[date]
    amount: float = 0.0
    total_amount: Optional[float] = None
    category_name: str = ""
    category_code: str = ""

    @property
    def effective_amount(self) -> float:
        """Gross amount when recorded, else the net amount."""
        return self.total_amount if self.total_amount else self.amount

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Expense":
        total = row.get("total_amount")
        return cls(
            expense_date=coerce_date(row.get("expense_date")),
            amount=coerce_amount(row.get("amount")),
            total_amount=coerce_amount(total) if total not in (None, "") else None,
            category_name=_text(row.get("category_name")),
            category_code=_text(row.get("category_code")),
        )


@dataclass(frozen=True)
class Journal:
    journal_date: Optional[date]
    total_credit: float = 0.0
    status: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Journal":
        return cls(
            journal_date=coerce_date(row.get("journal_date")),
            total_credit=coerce_amount(row.get("total_credit")),
            status=_text(row.get("status")).lower(),
        )


@dataclass(frozen=True)
class Account:
    account_name: str
    account_type: str = ""
    opening_balance: float = 0.0

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Account":
        return cls(
            account_name=_text(row.get("account_name")),
            account_type=_text(row.get("account_type")),
            opening_balance=coerce_amount(row.get("opening_balance")),
        )


@dataclass(frozen=True)
class OutstandingBalance:
    """Receivable or payable row; filtered by status rather than by date."""

    amount_remaining: float = 0.0
    status: str = ""
    party_name: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "OutstandingBalance":
        return cls(
            amount_remaining=coerce_amount(row.get("amount_remaining")),
            status=_text(row.get("status")).lower(),
            party_name=_text(row.get("party_name")),
        )


@dataclass(frozen=True)
class TdsTransaction:
    transaction_date: Optional[date]
    transaction_amount: float = 0.0
    tds_amount: float = 0.0
    description: str = ""
    vendor_name: str = ""
    section: str = "194C"

    @property
    def nature_of_payment(self) -> str:
        return self.description or self.vendor_name or "-"

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "TdsTransaction":
        return cls(
            transaction_date=coerce_date(row.get("transaction_date")),
            transaction_amount=coerce_amount(row.get("transaction_amount")),
            tds_amount=coerce_amount(row.get("tds_amount")),
            description=_text(row.get("description")),
            vendor_name=_text(row.get("vendor_name")),
            section=_text(row.get("section")) or "194C",
        )


@dataclass
class LedgerRecords:
    """Raw ledger arrays handed from the data source to the aggregator."""

    invoices: List[Invoice] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    journals: List[Journal] = field(default_factory=list)
    accounts: List[Account] = field(default_factory=list)
    receivables: List[OutstandingBalance] = field(default_factory=list)
    payables: List[OutstandingBalance] = field(default_factory=list)
    tds_transactions: List[TdsTransaction] = field(default_factory=list)

    @classmethod
    def from_mappings(cls, **tables: Optional[List[Mapping[str, Any]]]) -> "LedgerRecords":
        """Build records from plain dict rows keyed by table name."""
        builders = {
            "invoices": Invoice.from_mapping,
            "expenses": Expense.from_mapping,
            "journals": Journal.from_mapping,
            "accounts": Account.from_mapping,
            "receivables": OutstandingBalance.from_mapping,
            "payables": OutstandingBalance.from_mapping,
            "tds_transactions": TdsTransaction.from_mapping,
        }
        unknown = set(tables) - set(builders)
        if unknown:
            raise ValueError(f"Unknown ledger tables: {', '.join(sorted(unknown))}")
        return cls(**{name: [builders[name](row) for row in (rows or [])] for name, rows in tables.items()})


# ------------------
# Aggregate
# ------------------


class ExpenseCategory(str, Enum):
    """Statement buckets an expense category label can roll up into."""

    EMPLOYEE_BENEFIT = "employee_benefit"
    FINANCE_COST = "finance_cost"
    DEPRECIATION = "depreciation"
    OTHER = "other"


@dataclass(frozen=True)
class ExpenseLine:
    category: str
    amount: float
    bucket: ExpenseCategory = ExpenseCategory.OTHER


@dataclass(frozen=True)
class IncomeLine:
    description: str
    amount: float


@dataclass(frozen=True)
class FinancialData:
    """Flat, pre-computed monetary figures for one fiscal year."""

    revenue_from_operations: float = 0.0
    other_income: float = 0.0
    total_revenue: float = 0.0

    cost_of_materials: float = 0.0
    employee_benefit: float = 0.0
    financial_costs: float = 0.0
    depreciation: float = 0.0
    other_expenses: float = 0.0
    total_expenses: float = 0.0

    profit_before_tax: float = 0.0
    tax_expense: float = 0.0
    profit_after_tax: float = 0.0

    share_capital: float = 0.0
    reserves_and_surplus: float = 0.0
    long_term_borrowings: float = 0.0
    short_term_borrowings: float = 0.0
    trade_payables: float = 0.0
    other_current_liabilities: float = 0.0
    total_liabilities: float = 0.0

    fixed_assets: float = 0.0
    trade_receivables: float = 0.0
    cash_and_bank: float = 0.0
    other_current_assets: float = 0.0
    total_assets: float = 0.0

    total_tds: float = 0.0
    tds_transactions: Tuple[TdsTransaction, ...] = ()
    expense_details: Tuple[ExpenseLine, ...] = ()
    income_details: Tuple[IncomeLine, ...] = ()

    total_invoices: int = 0
    paid_invoices: int = 0
    pending_invoices: int = 0

    total_gst: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0

    @classmethod
    def empty(cls) -> "FinancialData":
        return cls()

    @property
    def balance_difference(self) -> float:
        """Total assets minus total equity and liabilities."""
        return self.total_assets - self.total_liabilities

    def is_balanced(self, tolerance: float = 0.5) -> bool:
        return abs(self.balance_difference) <= tolerance

    def earnings_per_share(self, shares_outstanding: float) -> float:
        if not shares_outstanding:
            return 0.0
        return self.profit_after_tax / shares_outstanding

    def other_expense_lines(self) -> List[ExpenseLine]:
        return [line for line in self.expense_details if line.bucket is ExpenseCategory.OTHER]

    def to_dict(self) -> Dict[str, Any]:
        """Scalar figures only, for logging and JSON summaries."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if isinstance(getattr(self, f.name), (int, float))
        }


# ------------------
# Compliance checklist
# ------------------


@dataclass(frozen=True)
class ComplianceItem:
    """One statutory filing row of the compliance summary."""

    name: str
    period: str = "-"
    status: str = "Pending"
    date_filed: str = "-"
    remarks: str = "-"


def default_compliance_checklist(fiscal_year: FiscalYear) -> List[ComplianceItem]:
    """Templated filing checklist; callers replace it with real filing status when known."""
    fy = fiscal_year.label
    span = f"Apr {fiscal_year.start_year} - Mar {fiscal_year.end_year}"
    return [
        ComplianceItem("GSTR-1", span, "Filed", "-", "Monthly returns filed"),
        ComplianceItem("GSTR-3B", span, "Filed", "-", "Monthly returns filed"),
        ComplianceItem("Annual Return (GSTR-9)", f"FY {fy}", "Pending", "-", "Due by Dec 31"),
        ComplianceItem("TDS Returns", f"Q1-Q4 FY {fy}", "Filed", "-", "All quarters filed"),
        ComplianceItem("DIR-3 KYC", f"FY {fy}", "Filed", "-", "Director KYC updated"),
        ComplianceItem("AOC-4", f"FY {fy}", "Pending", "-", "Financial statements"),
        ComplianceItem("MGT-7", f"FY {fy}", "Pending", "-", "Annual return"),
        ComplianceItem("Income Tax Return", f"AY {fiscal_year.assessment_year}", "Pending", "-", "Due by Oct 31"),
    ]
