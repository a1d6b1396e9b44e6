from __future__ import annotations

from datetime import date

import pytest

from annual_report.domain.models.financials import CompanyInfo, FiscalYear, LedgerRecords
from annual_report.infrastructure.db.ledger import LedgerRepository

USER_ID = "user-1"

COMPANY_ROW = {
    "company_name": "Acme Traders Private Limited",
    "owner_name": "Ravi Kumar",
    "address": "12 Market Road",
    "city": "Pune",
    "state": "Maharashtra",
    "pincode": "411001",
    "gst_number": "27ABCDE1234F1Z5",
    "cin": "U51909MH2020PTC123456",
    "pan": "ABCDE1234F",
    "date_of_incorporation": "2020-06-15",
    "director_din": "01234567",
    "second_director_name": "Meera Shah",
    "second_director_din": "07654321",
}


def make_ledger_rows():
    """One paid invoice of 500,000 against 150,000 of expenses inside FY 2024-25."""
    return {
        "invoices": [
            {"invoice_number": "INV-1", "invoice_date": date(2024, 6, 10), "amount": 500000, "gst_amount": 90000, "status": "paid"},
            {"invoice_number": "INV-0", "invoice_date": date(2024, 3, 31), "amount": 70000, "gst_amount": 0, "status": "paid"},
        ],
        "expenses": [
            {"expense_date": date(2024, 7, 1), "amount": 100000, "category_name": "Salary"},
            {"expense_date": date(2024, 8, 1), "amount": 50000, "category_name": "Rent"},
        ],
        "journals": [],
        "accounts": [
            {"account_name": "HDFC Bank", "account_type": "Asset", "opening_balance": 40000},
            {"account_name": "Office Furniture", "account_type": "Asset", "opening_balance": 9000},
        ],
        "receivables": [
            {"party_name": "Globex", "amount_remaining": 25000, "status": "pending"},
            {"party_name": "Initech", "amount_remaining": 5000, "status": "paid"},
        ],
        "payables": [{"party_name": "Landlord", "amount_remaining": 12000, "status": "pending"}],
        "tds_transactions": [],
    }


@pytest.fixture
def fiscal_year() -> FiscalYear:
    return FiscalYear.parse("2024-25")


@pytest.fixture
def company() -> CompanyInfo:
    return CompanyInfo.from_mapping(COMPANY_ROW)


@pytest.fixture
def ledger_records() -> LedgerRecords:
    return LedgerRecords.from_mappings(**make_ledger_rows())


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def seeded_repository(database_url) -> LedgerRepository:
    repository = LedgerRepository(database_url)
    repository.insert_rows("company_details", [COMPANY_ROW], user_id=USER_ID)
    for table, rows in make_ledger_rows().items():
        repository.insert_rows(table, rows, user_id=USER_ID)
    yield repository
    repository.engine.dispose()


@pytest.fixture
def user_id() -> str:
    return USER_ID
