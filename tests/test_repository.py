from __future__ import annotations

import pytest

from annual_report.domain.errors import DataUnavailable
from annual_report.domain.models.financials import FiscalYear
from annual_report.infrastructure.db.ledger import LedgerRepository


def test_company_details_round_trip(seeded_repository, user_id):
    company = seeded_repository.fetch_company_details(user_id)
    assert company.company_name == "Acme Traders Private Limited"
    assert company.directors == [("Ravi Kumar", "01234567"), ("Meera Shah", "07654321")]


def test_missing_company_raises(seeded_repository):
    with pytest.raises(DataUnavailable) as excinfo:
        seeded_repository.fetch_company_details("nobody")
    assert excinfo.value.source == "company_details"


def test_period_tables_are_filtered_by_fiscal_year(seeded_repository, user_id):
    ledger = seeded_repository.fetch_ledger(user_id, FiscalYear(2024))
    assert [invoice.invoice_number for invoice in ledger.invoices] == ["INV-1"]
    assert len(ledger.expenses) == 2
    assert len(ledger.receivables) == 2
    assert len(ledger.accounts) == 2

    earlier = seeded_repository.fetch_ledger(user_id, FiscalYear(2023))
    assert [invoice.invoice_number for invoice in earlier.invoices] == ["INV-0"]
    assert earlier.expenses == []
    assert len(earlier.payables) == 1


def test_rows_are_scoped_by_user(seeded_repository):
    ledger = seeded_repository.fetch_ledger("someone-else", FiscalYear(2024))
    assert ledger.invoices == []
    assert ledger.receivables == []


def test_insert_rows_validation(database_url, user_id):
    repository = LedgerRepository(database_url)
    with pytest.raises(ValueError):
        repository.insert_rows("salaries", [{"amount": 1}], user_id=user_id)
    with pytest.raises(ValueError):
        repository.insert_rows("invoices", [{"amount": 1}])
    assert repository.insert_rows("invoices", []) == 0
    repository.engine.dispose()


def test_company_details_are_replaced(seeded_repository, user_id):
    seeded_repository.insert_rows("company_details", [{"company_name": "Renamed Ltd"}], user_id=user_id)
    assert seeded_repository.fetch_company_details(user_id).company_name == "Renamed Ltd"


def test_unreachable_database_raises_data_unavailable(tmp_path):
    with pytest.raises(DataUnavailable):
        LedgerRepository(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'ledger.db'}")
