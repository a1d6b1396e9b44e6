from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from annual_report.domain.models.financials import CompanyInfo, FinancialData, FiscalYear
from annual_report.reports.renderer import ReportRenderer


def test_paragraphs_split_on_blank_lines(tmp_path):
    (tmp_path / "note.txt.j2").write_text(
        "Revenue was Rs. {{ amount | currency }}\nfor the year.\n\n.\n\nClosing line.\n", encoding="utf-8"
    )
    renderer = ReportRenderer(template_dir=tmp_path, grouping="indian")
    assert renderer.render_paragraphs("note.txt.j2", {"amount": 1234567}) == [
        "Revenue was Rs. 12,34,567 for the year.",
        "",
        "Closing line.",
    ]


def test_missing_context_is_an_error(tmp_path):
    (tmp_path / "strict.txt.j2").write_text("{{ missing }}", encoding="utf-8")
    with pytest.raises(UndefinedError):
        ReportRenderer(template_dir=tmp_path).render_template("strict.txt.j2", {})


def test_directors_report_template_profit_branch():
    paragraphs = ReportRenderer().render_paragraphs(
        "directors_report.txt.j2",
        {
            "company": CompanyInfo(company_name="Acme"),
            "data": FinancialData(total_revenue=500000.0, profit_after_tax=262500.0),
            "fiscal_year": FiscalYear(2024),
        },
    )
    assert paragraphs[0] == "To the Members of Acme,"
    assert "Total Revenue: Rs. 500,000" in paragraphs
    assert "Total Expenses: Rs. -" in paragraphs
    assert any("satisfactory performance" in p for p in paragraphs)
