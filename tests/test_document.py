from __future__ import annotations

import pytest

from annual_report.domain.errors import LayoutOverflow
from annual_report.reports.document import (
    DocumentCursor,
    ReportDocument,
    TableRow,
    TableSpec,
    TableTheme,
    TextOp,
)
from annual_report.reports.formatting import compute_column_styles
from annual_report.reports.layout import ReportLayoutConfig


def make_cursor():
    document = ReportDocument(ReportLayoutConfig(), title="Test")
    return document, DocumentCursor(document)


def test_long_text_breaks_pages_before_the_footer_band():
    document, cursor = make_cursor()
    for index in range(120):
        cursor.write_line(f"Line {index}")

    layout = document.layout
    assert document.page_count > 1
    assert document.current_page == document.page_count
    for page in document:
        for op in page.ops:
            assert isinstance(op, TextOp)
            assert op.y <= layout.content_bottom
    assert document.page(2).ops[0].y == pytest.approx(layout.content_top + layout.body_size)


def test_tables_split_by_row_and_repeat_the_head():
    document, cursor = make_cursor()
    rows = [TableRow([f"Item {index}", f"{index * 100:,}"]) for index in range(1, 121)]
    cursor.draw_table(TableSpec(head=["Particulars", "Amount"], rows=rows))

    chunks = [table for page in document for table in page.tables()]
    assert len(chunks) > 1
    assert all(chunk.cells[0] == ("Particulars", "Amount") for chunk in chunks)
    assert sum(len(chunk.cells) - 1 for chunk in chunks) == 120
    for page in document:
        for table in page.tables():
            assert table.bottom <= document.layout.content_bottom + 0.01


def test_emphasis_defaults_to_label_keywords_and_can_be_overridden():
    document, cursor = make_cursor()
    cursor.draw_table(
        TableSpec(
            head=None,
            rows=[
                TableRow(["   Revenue", "10"]),
                TableRow(["    Total Assets", "10"]),
                TableRow(["Net Profit", "5"], emphasized=False),
                TableRow(["Heading", ""], emphasized=True),
            ],
            theme=TableTheme.plain(),
        )
    )
    table = document.page(1).tables()[0]
    assert table.emphasized == (False, True, False, True)
    assert table.cells[0] == ("   Revenue", "10")


def test_table_cells_keep_markup_characters_and_indentation():
    document, cursor = make_cursor()
    cursor.draw_table(
        TableSpec(head=["Particulars", "Amount"], rows=[TableRow(["    Plant <Machinery> & Tools", "1,000"])])
    )
    table = document.page(1).tables()[0]
    assert table.cells[1] == ("    Plant <Machinery> & Tools", "1,000")
    assert table.flowable.repeatRows == 1
    assert document.to_pdf_bytes().startswith(b"%PDF")


def test_continuation_pieces_end_with_the_last_row():
    document, cursor = make_cursor()
    cursor.write_line("Intro")
    rows = [TableRow([f"Item {index}", str(index)]) for index in range(1, 81)]
    cursor.draw_table(TableSpec(head=["Particulars", "Amount"], rows=rows))

    chunks = [table for page in document for table in page.tables()]
    assert chunks[0].cells[1] == ("Item 1", "1")
    assert chunks[-1].cells[-1] == ("Item 80", "80")
    assert all(chunk.height > 0 for chunk in chunks)


def test_row_taller_than_a_page_is_rejected():
    document, cursor = make_cursor()
    styles = compute_column_styles(document.layout.content_width, [1, 1])
    spec = TableSpec(head=["A", "B"], rows=[TableRow(["word " * 4000, "1"])], columns=styles)
    with pytest.raises(LayoutOverflow):
        cursor.draw_table(spec)


def test_empty_table_draws_nothing():
    document, cursor = make_cursor()
    y = cursor.y
    assert cursor.draw_table(TableSpec(head=None, rows=[])) == y
    assert document.page(1).ops == []


def test_headings_are_bold_only_on_exact_match():
    document, cursor = make_cursor()
    cursor.write_paragraphs(["OPINION:", "", "OPINION: body text"], headings=("OPINION:",))
    texts = [op for op in document.page(1).ops if isinstance(op, TextOp)]
    assert texts[0].font == document.layout.font_bold
    assert texts[1].font == document.layout.font_regular


def test_ensure_space_only_breaks_when_needed():
    document, cursor = make_cursor()
    assert cursor.ensure_space(10) is False
    cursor.write_line("first")
    assert cursor.ensure_space(cursor.page_capacity) is True
    assert document.page_count == 2
    assert cursor.at_top


def test_page_pointer_and_section_markers():
    document, cursor = make_cursor()
    document.mark_section("one", "One")
    cursor.new_page()
    document.mark_section("two", "Two")
    assert document.section_pages() == {"one": 1, "two": 2}

    document.set_page(1)
    assert document.current_page == 1
    with pytest.raises(IndexError):
        document.set_page(3)


def test_pdf_bytes_have_the_pdf_header():
    document, cursor = make_cursor()
    cursor.write_heading("Heading")
    cursor.draw_table(TableSpec(head=["A", "B"], rows=[TableRow(["x", "1"])], theme=TableTheme.dark_head()))
    cursor.rule()
    payload = document.to_pdf_bytes()
    assert payload.startswith(b"%PDF")


def test_layout_from_config_and_validation():
    class Settings:
        page_size = "letter"
        number_grouping = "indian"

    layout = ReportLayoutConfig.from_config(Settings())
    assert layout.page_width == pytest.approx(612.0)
    assert layout.number_grouping == "indian"
    assert layout.footer_top == layout.content_bottom

    Settings.page_size = "A3"
    with pytest.raises(ValueError):
        ReportLayoutConfig.from_config(Settings())
    with pytest.raises(ValueError):
        ReportLayoutConfig(number_grouping="roman")
