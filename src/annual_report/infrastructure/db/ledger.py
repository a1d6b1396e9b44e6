"""SQLite ledger store supplying company details and raw ledger records."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from annual_report.domain.errors import DataUnavailable
from annual_report.domain.models.financials import CompanyInfo, FiscalYear, LedgerRecords

logger = logging.getLogger(__name__)

# Insertable columns per table; user_id is added by the repository.
TABLE_COLUMNS: Dict[str, List[str]] = {
    "company_details": [
        "company_name",
        "owner_name",
        "address",
        "city",
        "state",
        "pincode",
        "place",
        "gst_number",
        "cin",
        "pan",
        "date_of_incorporation",
        "director_din",
        "second_director_name",
        "second_director_din",
    ],
    "invoices": ["invoice_number", "invoice_date", "amount", "gst_amount", "status"],
    "expenses": ["expense_date", "amount", "total_amount", "category_name", "category_code"],
    "journals": ["journal_date", "total_credit", "status"],
    "accounts": ["account_name", "account_type", "opening_balance"],
    "receivables": ["party_name", "amount_remaining", "status"],
    "payables": ["party_name", "amount_remaining", "status"],
    "tds_transactions": [
        "transaction_date",
        "transaction_amount",
        "tds_amount",
        "description",
        "vendor_name",
        "section",
    ],
}

# Period tables and their date column; the rest are point-in-time balances.
PERIOD_TABLES: Dict[str, str] = {
    "invoices": "invoice_date",
    "expenses": "expense_date",
    "journals": "journal_date",
    "tds_transactions": "transaction_date",
}
BALANCE_TABLES = ("accounts", "receivables", "payables")


def _bindable(value: Any) -> Any:
    return value.isoformat() if isinstance(value, date) else value


class LedgerRepository:
    """Gateway for reading ledger records scoped by user and fiscal year."""

    def __init__(self, database_uri: str, *, echo: bool = False) -> None:
        self._engine: Engine = create_engine(database_uri, echo=echo, future=True)
        self.ensure_schema()

    @property
    def engine(self) -> Engine:
        return self._engine

    # -----------------
    # Schema management
    # -----------------
    def ensure_schema(self) -> None:
        """Create ledger tables if they do not already exist."""
        ddl = [
            """
            CREATE TABLE IF NOT EXISTS company_details (
              user_id TEXT PRIMARY KEY,
              company_name TEXT NOT NULL,
              owner_name TEXT,
              address TEXT,
              city TEXT,
              state TEXT,
              pincode TEXT,
              place TEXT,
              gst_number TEXT,
              cin TEXT,
              pan TEXT,
              date_of_incorporation TEXT,
              director_din TEXT,
              second_director_name TEXT,
              second_director_din TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS invoices (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              invoice_number TEXT,
              invoice_date DATE,
              amount REAL,
              gst_amount REAL,
              status TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS expenses (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              expense_date DATE,
              amount REAL,
              total_amount REAL,
              category_name TEXT,
              category_code TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS journals (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              journal_date DATE,
              total_credit REAL,
              status TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS accounts (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              account_name TEXT NOT NULL,
              account_type TEXT,
              opening_balance REAL
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS receivables (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              party_name TEXT,
              amount_remaining REAL,
              status TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS payables (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              party_name TEXT,
              amount_remaining REAL,
              status TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS tds_transactions (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              transaction_date DATE,
              transaction_amount REAL,
              tds_amount REAL,
              description TEXT,
              vendor_name TEXT,
              section TEXT
            );
            """,
        ]
        ddl += [
            f"CREATE INDEX IF NOT EXISTS idx_{table}_user ON {table}(user_id);"
            for table in TABLE_COLUMNS
            if table != "company_details"
        ]
        try:
            with self._engine.begin() as conn:
                for statement in ddl:
                    conn.execute(text(statement))
        except SQLAlchemyError as exc:
            raise DataUnavailable(f"Could not prepare ledger schema: {exc}", source="schema") from exc

    # -------
    # Reading
    # -------
    def _select(self, table: str, sql: str, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        try:
            with self._engine.connect() as conn:
                return [dict(row) for row in conn.execute(text(sql), dict(params)).mappings()]
        except SQLAlchemyError as exc:
            raise DataUnavailable(f"Failed to read {table}: {exc}", source=table) from exc

    def fetch_company_details(self, user_id: str) -> CompanyInfo:
        columns = ", ".join(TABLE_COLUMNS["company_details"])
        rows = self._select(
            "company_details",
            f"SELECT {columns} FROM company_details WHERE user_id = :user_id",
            {"user_id": user_id},
        )
        if not rows:
            raise DataUnavailable(f"No company details recorded for user {user_id!r}", source="company_details")
        return CompanyInfo.from_mapping(rows[0])

    def fetch_ledger(self, user_id: str, fiscal_year: FiscalYear) -> LedgerRecords:
        """Period tables restricted to the fiscal-year window; balance tables unfiltered."""
        params = {
            "user_id": user_id,
            "start": fiscal_year.start_date.isoformat(),
            "end": fiscal_year.end_date.isoformat(),
        }
        tables: Dict[str, List[Dict[str, Any]]] = {}
        for table, date_column in PERIOD_TABLES.items():
            columns = ", ".join(TABLE_COLUMNS[table])
            tables[table] = self._select(
                table,
                f"""
                SELECT {columns} FROM {table}
                WHERE user_id = :user_id
                  AND substr({date_column}, 1, 10) BETWEEN :start AND :end
                ORDER BY {date_column}, id
                """,
                params,
            )
        for table in BALANCE_TABLES:
            columns = ", ".join(TABLE_COLUMNS[table])
            tables[table] = self._select(
                table,
                f"SELECT {columns} FROM {table} WHERE user_id = :user_id ORDER BY id",
                {"user_id": user_id},
            )
        logger.debug(
            "Fetched ledger for %s FY %s: %s",
            user_id,
            fiscal_year.label,
            {name: len(rows) for name, rows in tables.items()},
        )
        return LedgerRecords.from_mappings(**tables)

    # -------
    # Writing
    # -------
    def insert_rows(self, table: str, rows: Iterable[Mapping[str, Any]], *, user_id: Optional[str] = None) -> int:
        """Insert plain dict rows into a ledger table; unknown keys are ignored."""
        if table not in TABLE_COLUMNS:
            raise ValueError(f"Unknown ledger table {table!r}")
        allowed = TABLE_COLUMNS[table]
        payload = []
        for row in rows:
            owner = row.get("user_id", user_id)
            if not owner:
                raise ValueError(f"Row for {table} has no user_id")
            record = {column: _bindable(row.get(column)) for column in allowed}
            record["user_id"] = owner
            payload.append(record)
        if not payload:
            return 0

        columns = ["user_id"] + allowed
        verb = "INSERT OR REPLACE" if table == "company_details" else "INSERT"
        stmt = text(
            f"{verb} INTO {table} ({', '.join(columns)}) VALUES ({', '.join(':' + c for c in columns)})"
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt, payload)
        except SQLAlchemyError as exc:
            raise DataUnavailable(f"Failed to write {table}: {exc}", source=table) from exc
        return len(payload)
