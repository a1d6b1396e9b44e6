"""Notes to Accounts: the numbered schedules referenced from the statements."""
from __future__ import annotations

from typing import Callable, Dict, List

from annual_report.reports.document import DocumentCursor, TableRow
from annual_report.reports.sections.base import Note, ReportContext, amount_table, document_title, section_title

AUTHORIZED_SHARES = 10000


def _share_capital(ctx: ReportContext) -> List[TableRow]:
    face = ctx.share_face_value
    authorized = AUTHORIZED_SHARES * face
    issued = ctx.shares_outstanding
    return [
        TableRow(["1", "AUTHORIZED CAPITAL", ""], emphasized=True),
        TableRow(["", f"{AUTHORIZED_SHARES:,} Equity Shares of Rs. {face:g}/- each", ctx.money(authorized)]),
        TableRow(["2", "ISSUED, SUBSCRIBED & PAID UP CAPITAL", ""], emphasized=True),
        TableRow(["", "To the Subscribers of Memorandum", ""]),
        TableRow(["", f"{issued:,.0f} Equity Shares of Rs. {face:g}/- each, Fully paid up", ctx.money(ctx.data.share_capital)]),
        TableRow(["", "Total", ctx.money(ctx.data.share_capital)]),
    ]


def _reserves(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    return [
        TableRow(["1", "Opening Surplus", "-"]),
        TableRow(["", "Add/(Less): Current Year Profit/(Loss)", ctx.money(d.profit_after_tax)], emphasized=False),
        TableRow(["", "Closing Balance", ctx.money(d.reserves_and_surplus)], emphasized=True),
    ]


def _other_current_liabilities(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    return [
        TableRow(["1", "Trade Payables", ctx.money(d.trade_payables)]),
        TableRow(["2", "Statutory Dues", "-"]),
        TableRow(["", "Total", ctx.money(d.other_current_liabilities)]),
    ]


def _cash(ctx: ReportContext) -> List[TableRow]:
    d = ctx.data
    return [
        TableRow(["1", "Cash in Hand", "-"]),
        TableRow(["2", "Balance with Banks", ctx.money(d.cash_and_bank)]),
        TableRow(["", "Total", ctx.money(d.cash_and_bank)]),
    ]


def _revenue(ctx: ReportContext) -> List[TableRow]:
    lines = [line for line in ctx.data.income_details if line.description != "Other Income"]
    rows = [
        TableRow([str(index), line.description, ctx.money(line.amount)], emphasized=False)
        for index, line in enumerate(lines, start=1)
    ]
    rows.append(TableRow(["", "Total", ctx.money(ctx.data.revenue_from_operations)]))
    return rows


def _other_income(ctx: ReportContext) -> List[TableRow]:
    return [
        TableRow(["1", "Other Income / Rounding off", ctx.money(ctx.data.other_income)]),
        TableRow(["", "Total", ctx.money(ctx.data.other_income)]),
    ]


def _other_expenses(ctx: ReportContext) -> List[TableRow]:
    rows = [
        TableRow([str(index), line.category, ctx.money(line.amount)], emphasized=False)
        for index, line in enumerate(ctx.data.other_expense_lines(), start=1)
    ]
    rows.append(TableRow(["", "Total", ctx.money(ctx.data.other_expenses)]))
    return rows


NOTE_ROWS: Dict[Note, Callable[[ReportContext], List[TableRow]]] = {
    Note.SHARE_CAPITAL: _share_capital,
    Note.RESERVES_AND_SURPLUS: _reserves,
    Note.OTHER_CURRENT_LIABILITIES: _other_current_liabilities,
    Note.CASH_AND_CASH_EQUIVALENTS: _cash,
    Note.REVENUE_FROM_OPERATIONS: _revenue,
    Note.OTHER_INCOME: _other_income,
    Note.OTHER_EXPENSES: _other_expenses,
}

BALANCE_SHEET_NOTES = (
    Note.SHARE_CAPITAL,
    Note.RESERVES_AND_SURPLUS,
    Note.OTHER_CURRENT_LIABILITIES,
    Note.CASH_AND_CASH_EQUIVALENTS,
)
PROFIT_AND_LOSS_NOTES = (Note.REVENUE_FROM_OPERATIONS, Note.OTHER_INCOME, Note.OTHER_EXPENSES)


def _note(cursor: DocumentCursor, ctx: ReportContext, note: Note) -> float:
    layout = cursor.layout
    # heading plus header row and one body row stay together
    row = layout.leading(layout.table_size) + 2 * layout.cell_padding
    cursor.ensure_space(layout.leading(layout.body_size) * 1.5 + 2 * row)
    cursor.write_line(note.heading, bold=True)
    cursor.advance(layout.cell_padding)
    return cursor.draw_table(amount_table(ctx, NOTE_ROWS[note](ctx)))


def notes_to_accounts(cursor: DocumentCursor, ctx: ReportContext) -> float:
    year_end = f"31.03.{ctx.fiscal_year.end_year}"
    section_title(cursor, "NOTES TO ACCOUNTS")
    document_title(cursor, f"Notes forming part of Balance Sheet as on {year_end}")
    for note in BALANCE_SHEET_NOTES:
        _note(cursor, ctx, note)
    cursor.advance(cursor.layout.section_spacing)
    document_title(cursor, f"Notes forming part of Profit and Loss Account for the period ended {year_end}")
    for note in PROFIT_AND_LOSS_NOTES:
        _note(cursor, ctx, note)
    return cursor.y
