"""Application-wide configuration defaults and helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Base directory for resolving relative paths.
BASE_DIR = Path(__file__).resolve().parent


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse truthy environment values like '1' or 'true'."""
    if value is None:
        return default
    if not isinstance(value, str):
        value = str(value)
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Optional[str]) -> Optional[int]:
    """Safely parse an integer env var, returning None on failure."""
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _to_float(value: Optional[str], default: float) -> float:
    """Parse a float env var, keeping the default on blank or invalid input."""
    if value is None or not str(value).strip():
        return default
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass
class Config:
    """Runtime configuration loaded from environment variables."""

    debug: bool = False
    database_url: str = f"sqlite:///{BASE_DIR / 'data' / 'ledger.db'}"
    sqlite_echo: bool = False
    output_dir: Path = BASE_DIR / "reports"
    user_id: Optional[str] = None
    tax_rate: float = 0.25
    cess_rate: float = 0.04
    share_capital: float = 10000.0
    share_face_value: float = 10.0
    page_size: str = "A4"
    number_grouping: str = "international"
    strict_balance: bool = False
    include_previous_year: bool = True
    auditor_firm_name: Optional[str] = None
    auditor_frn: Optional[str] = None
    auditor_partner: Optional[str] = None
    auditor_membership_no: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration instance using environment overrides."""
        defaults = cls()
        output_dir = Path(os.getenv("OUTPUT_DIR", BASE_DIR / "reports"))
        share_capital = _to_int(os.getenv("SHARE_CAPITAL"))

        return cls(
            debug=_to_bool(os.getenv("APP_DEBUG")),
            database_url=os.getenv("LEDGER_DATABASE_URL", defaults.database_url),
            sqlite_echo=_to_bool(os.getenv("SQLITE_ECHO")),
            output_dir=output_dir,
            user_id=os.getenv("LEDGER_USER_ID") or None,
            tax_rate=_to_float(os.getenv("TAX_RATE"), defaults.tax_rate),
            cess_rate=_to_float(os.getenv("CESS_RATE"), defaults.cess_rate),
            share_capital=float(share_capital) if share_capital is not None else defaults.share_capital,
            share_face_value=_to_float(os.getenv("SHARE_FACE_VALUE"), defaults.share_face_value),
            page_size=os.getenv("REPORT_PAGE_SIZE", defaults.page_size).upper(),
            number_grouping=os.getenv("REPORT_NUMBER_GROUPING", defaults.number_grouping).lower(),
            strict_balance=_to_bool(os.getenv("REPORT_STRICT_BALANCE")),
            include_previous_year=_to_bool(os.getenv("REPORT_INCLUDE_PREVIOUS_YEAR"), default=True),
            auditor_firm_name=os.getenv("AUDITOR_FIRM_NAME") or None,
            auditor_frn=os.getenv("AUDITOR_FRN") or None,
            auditor_partner=os.getenv("AUDITOR_PARTNER") or None,
            auditor_membership_no=os.getenv("AUDITOR_MEMBERSHIP_NO") or None,
        )

    def ensure_directories(self) -> None:
        """Create directories needed for runtime artifacts."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if self.database_url.startswith("sqlite:///"):
            db_path = Path(self.database_url[len("sqlite:///"):])
            if str(db_path) and str(db_path) != ":memory:":
                db_path.parent.mkdir(parents=True, exist_ok=True)
