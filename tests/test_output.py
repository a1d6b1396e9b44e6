from __future__ import annotations

import pytest

from annual_report.domain.errors import InvalidDocument
from annual_report.domain.models.financials import FiscalYear
from annual_report.reports.charts import highlights_bar_chart
from annual_report.reports.output import (
    default_report_filename,
    failed_output_path,
    validate_pdf_bytes,
    write_report,
)


def test_valid_pdf_is_written(tmp_path):
    target = tmp_path / "out" / "report.pdf"
    assert write_report(b"%PDF-1.4 body", target) == target
    assert target.read_bytes().startswith(b"%PDF")
    assert not failed_output_path(target).exists()


def test_invalid_payload_goes_to_sidecar(tmp_path):
    target = tmp_path / "report.pdf"
    with pytest.raises(InvalidDocument):
        write_report(b"<html>oops</html>", target)
    assert not target.exists()
    sidecar = tmp_path / "report.pdf.failed.txt"
    assert sidecar.read_bytes() == b"<html>oops</html>"


def test_validate_pdf_bytes():
    assert validate_pdf_bytes(b"%PDF-1.7")
    assert not validate_pdf_bytes(b"")
    assert not validate_pdf_bytes(b"PDF")


def test_default_filename():
    fy = FiscalYear(2024)
    assert default_report_filename(fy, "Acme Traders Pvt. Ltd.") == "acme-traders-pvt-ltd-annual-report-2024-25.pdf"
    assert default_report_filename(fy) == "annual-report-2024-25.pdf"
    assert default_report_filename(fy, "Acme", "financial_statements") == "acme-financial-statements-2024-25.pdf"


def test_chart_renders_png():
    payload = highlights_bar_chart([500000, 150000, -20000], ["Revenue", "Expenses", "Profit"], title="FY 2024-25")
    assert payload.startswith(b"\x89PNG")
    with pytest.raises(ValueError):
        highlights_bar_chart([1, 2], ["only one"])
