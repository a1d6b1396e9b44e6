"""Paginated report document.

Sections never talk to ReportLab directly. They move a ``DocumentCursor`` down
the current page and the cursor records drawing operations on the active
``Page`` of a ``ReportDocument``. The recorded pages can be inspected (tests,
table-of-contents dry runs) and are replayed onto a ReportLab canvas only when
``to_pdf_bytes`` is called.

Coordinates are PostScript points with ``y`` measured downwards from the top
edge of the page; the replay flips them into ReportLab's bottom-up space.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from annual_report.domain.errors import LayoutOverflow
from annual_report.reports.formatting import ColumnStyle, compute_equal_column_styles, is_emphasized_label
from annual_report.reports.layout import ReportLayoutConfig

logger = logging.getLogger(__name__)

BLACK = "#000000"
ALIGNMENTS = ("left", "center", "right")
PARAGRAPH_ALIGN = {"LEFT": TA_LEFT, "CENTER": TA_CENTER, "RIGHT": TA_RIGHT}


# ---------------------------------------------------------------------------
# Recorded drawing operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float
    align: str = "left"
    color: str = BLACK


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.5
    color: str = BLACK


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class TableOp:
    """A table (or one page-sized chunk of it) with its top-left corner at ``(x, y)``."""

    x: float
    y: float
    width: float
    height: float
    cells: Tuple[Tuple[str, ...], ...]
    emphasized: Tuple[bool, ...]
    flowable: Any = field(repr=False, compare=False)

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Page:
    number: int
    ops: List[Any] = field(default_factory=list)

    def texts(self) -> List[str]:
        """Every string on the page, table cells included, in drawing order."""
        out: List[str] = []
        for op in self.ops:
            if isinstance(op, TextOp):
                out.append(op.text)
            elif isinstance(op, TableOp):
                for row in op.cells:
                    out.extend(row)
        return out

    def tables(self) -> List[TableOp]:
        return [op for op in self.ops if isinstance(op, TableOp)]

    def lowest_y(self, below: Optional[float] = None) -> float:
        """Largest y reached by any op, optionally ignoring ops starting at or below ``below``."""
        lowest = 0.0
        for op in self.ops:
            top, bottom = _extent(op)
            if below is not None and top >= below:
                continue
            lowest = max(lowest, bottom)
        return lowest


def _extent(op: Any) -> Tuple[float, float]:
    if isinstance(op, TextOp):
        return op.y - op.size, op.y
    if isinstance(op, LineOp):
        return min(op.y1, op.y2), max(op.y1, op.y2)
    return op.y, op.y + op.height


@dataclass(frozen=True)
class SectionMarker:
    key: str
    title: str
    page: int


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TableTheme:
    name: str
    head_background: Optional[str] = None
    head_text: str = BLACK
    grid: bool = False
    rule_below_head: bool = True

    @classmethod
    def plain(cls) -> "TableTheme":
        return cls("plain")

    @classmethod
    def grid_lines(cls) -> "TableTheme":
        return cls("grid", grid=True, rule_below_head=False)

    @classmethod
    def dark_head(cls) -> "TableTheme":
        return cls("dark_head", head_background="#2F3B52", head_text="#FFFFFF", grid=True, rule_below_head=False)

    @classmethod
    def light_head(cls) -> "TableTheme":
        return cls("light_head", head_background="#E4E8EF", grid=True, rule_below_head=False)


@dataclass
class TableRow:
    """One body row. ``emphasized=None`` falls back to the total/profit/loss label rule."""

    cells: Sequence[Any]
    emphasized: Optional[bool] = None
    cell_colors: Dict[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cells = tuple("" if c is None else str(c) for c in self.cells)
        self.cell_colors = dict(self.cell_colors or {})

    def is_emphasized(self, label_column: int = 0) -> bool:
        if self.emphasized is not None:
            return self.emphasized
        return is_emphasized_label(*self.cells[label_column:label_column + 1])


@dataclass
class TableSpec:
    head: Optional[Sequence[str]]
    rows: Sequence[TableRow]
    columns: Optional[Sequence[ColumnStyle]] = None
    theme: TableTheme = field(default_factory=TableTheme.grid_lines)
    label_column: int = 0
    font_size: Optional[float] = None
    space_after: float = 8.0

    @property
    def column_count(self) -> int:
        if self.head:
            return len(self.head)
        return max((len(row.cells) for row in self.rows), default=1)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class ReportDocument:
    """Ordered pages of recorded drawing operations with a current-page pointer."""

    def __init__(self, layout: Optional[ReportLayoutConfig] = None, *, title: str = "") -> None:
        self.layout = layout or ReportLayoutConfig()
        self.title = title
        self._pages: List[Page] = []
        self._current = -1
        self._sections: List[SectionMarker] = []

    # Pages -------------------------------------------------------------
    @property
    def pages(self) -> List[Page]:
        return list(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_page(self) -> int:
        """1-based number of the page that receives new operations."""
        return self._current + 1

    def add_page(self) -> int:
        self._pages.append(Page(number=len(self._pages) + 1))
        self._current = len(self._pages) - 1
        return self.current_page

    def set_page(self, number: int) -> None:
        if not 1 <= number <= len(self._pages):
            raise IndexError(f"Page {number} out of range 1..{len(self._pages)}")
        self._current = number - 1

    def page(self, number: int) -> Page:
        return self._pages[number - 1]

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    # Sections ----------------------------------------------------------
    def mark_section(self, key: str, title: str) -> SectionMarker:
        marker = SectionMarker(key=key, title=title, page=self.current_page)
        self._sections.append(marker)
        return marker

    @property
    def sections(self) -> List[SectionMarker]:
        return list(self._sections)

    def section_pages(self) -> Dict[str, int]:
        return {marker.key: marker.page for marker in self._sections}

    # Drawing -----------------------------------------------------------
    def _record(self, op: Any) -> Any:
        if self._current < 0:
            self.add_page()
        self._pages[self._current].ops.append(op)
        return op

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font: Optional[str] = None,
        size: Optional[float] = None,
        align: str = "left",
        color: str = BLACK,
    ) -> TextOp:
        if align not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment {align!r}")
        return self._record(
            TextOp(x, y, text, font or self.layout.font_regular, size or self.layout.body_size, align, color)
        )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *, width: float = 0.5, color: str = BLACK) -> LineOp:
        return self._record(LineOp(x1, y1, x2, y2, width, color))

    def draw_image(self, x: float, y: float, width: float, height: float, data: bytes) -> ImageOp:
        return self._record(ImageOp(x, y, width, height, data))

    def draw_table(self, op: TableOp) -> TableOp:
        return self._record(op)

    def text_width(self, text: str, font: Optional[str] = None, size: Optional[float] = None) -> float:
        return stringWidth(text, font or self.layout.font_regular, size or self.layout.body_size)

    def wrap_text(self, text: str, width: float, font: Optional[str] = None, size: Optional[float] = None) -> List[str]:
        lines = simpleSplit(text, font or self.layout.font_regular, size or self.layout.body_size, width)
        return lines or [""]

    # Output ------------------------------------------------------------
    def to_pdf_bytes(self) -> bytes:
        """Replay every recorded page onto a ReportLab canvas."""
        buffer = io.BytesIO()
        page_h = self.layout.page_height
        pdf = rl_canvas.Canvas(buffer, pagesize=self.layout.page_size, pageCompression=1)
        if self.title:
            pdf.setTitle(self.title)
        for page in self._pages or [Page(1)]:
            for op in page.ops:
                if isinstance(op, TextOp):
                    pdf.setFont(op.font, op.size)
                    pdf.setFillColor(colors.HexColor(op.color))
                    if op.align == "center":
                        pdf.drawCentredString(op.x, page_h - op.y, op.text)
                    elif op.align == "right":
                        pdf.drawRightString(op.x, page_h - op.y, op.text)
                    else:
                        pdf.drawString(op.x, page_h - op.y, op.text)
                elif isinstance(op, LineOp):
                    pdf.setStrokeColor(colors.HexColor(op.color))
                    pdf.setLineWidth(op.width)
                    pdf.line(op.x1, page_h - op.y1, op.x2, page_h - op.y2)
                elif isinstance(op, ImageOp):
                    pdf.drawImage(
                        ImageReader(io.BytesIO(op.data)),
                        op.x,
                        page_h - op.y - op.height,
                        width=op.width,
                        height=op.height,
                        mask="auto",
                    )
                elif isinstance(op, TableOp):
                    op.flowable.wrapOn(pdf, op.width, op.height)
                    op.flowable.drawOn(pdf, op.x, page_h - op.y - op.height)
            pdf.showPage()
        pdf.save()
        payload = buffer.getvalue()
        logger.debug("Serialized %d page(s) into %d bytes", len(self._pages), len(payload))
        return payload


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class DocumentCursor:
    """Vertical write position on the document's current page."""

    def __init__(self, document: ReportDocument) -> None:
        self.document = document
        self.layout = document.layout
        if document.page_count == 0:
            document.add_page()
        self.y = self.layout.content_top
        self._styles: Dict[Tuple[float, str, bool, str], ParagraphStyle] = {}

    @property
    def remaining(self) -> float:
        return self.layout.content_bottom - self.y

    @property
    def at_top(self) -> bool:
        return self.y <= self.layout.content_top + 0.01

    @property
    def page_capacity(self) -> float:
        return self.layout.content_bottom - self.layout.content_top

    def advance(self, dy: float) -> float:
        self.y = min(self.y + dy, self.layout.content_bottom)
        return self.y

    def move_to(self, y: float) -> float:
        self.y = min(max(y, self.layout.content_top), self.layout.content_bottom)
        return self.y

    def new_page(self) -> float:
        self.document.add_page()
        self.y = self.layout.content_top
        return self.y

    def ensure_space(self, height: float) -> bool:
        """Break to a new page when ``height`` does not fit; returns True if it broke."""
        if height > self.remaining and not self.at_top:
            self.new_page()
            return True
        return False

    # Text --------------------------------------------------------------
    def _x_for(self, align: str, indent: float) -> float:
        if align == "center":
            return self.layout.content_left + self.layout.content_width / 2
        if align == "right":
            return self.layout.content_right - indent
        return self.layout.content_left + indent

    def write_line(
        self,
        text: str,
        *,
        size: Optional[float] = None,
        bold: bool = False,
        align: str = "left",
        indent: float = 0.0,
        color: str = BLACK,
    ) -> float:
        """Write ``text`` wrapped to the content width, one page-break check per line."""
        size = size or self.layout.body_size
        font = self.layout.font_bold if bold else self.layout.font_regular
        leading = self.layout.leading(size)
        if leading > self.page_capacity:
            raise LayoutOverflow(f"Line height {leading:.1f}pt exceeds the page content area")
        for line in self.document.wrap_text(text, self.layout.content_width - indent, font, size):
            self.ensure_space(leading)
            self.document.draw_text(self._x_for(align, indent), self.y + size, line, font=font, size=size, align=align, color=color)
            self.y += leading
        return self.y

    def write_centered(self, text: str, *, size: Optional[float] = None, bold: bool = False, color: str = BLACK) -> float:
        return self.write_line(text, size=size, bold=bold, align="center", color=color)

    def write_heading(self, text: str, *, size: Optional[float] = None) -> float:
        size = size or self.layout.header_size
        # keep a heading together with at least two body lines
        self.ensure_space(self.layout.leading(size) + 2 * self.layout.leading(self.layout.body_size))
        self.write_line(text, size=size, bold=True, align="center")
        return self.advance(self.layout.leading(self.layout.body_size) / 2)

    def write_paragraphs(
        self,
        paragraphs: Iterable[str],
        *,
        size: Optional[float] = None,
        spacing: Optional[float] = None,
        indent: float = 0.0,
        headings: Collection[str] = (),
    ) -> float:
        """Wrapped paragraphs; a blank paragraph becomes one empty line of spacing."""
        size = size or self.layout.body_size
        leading = self.layout.leading(size)
        gap = leading / 2 if spacing is None else spacing
        for paragraph in paragraphs:
            text = paragraph.strip()
            if not text:
                self.advance(leading)
                continue
            bold = text in headings
            self.write_line(text, size=size, bold=bold, indent=indent)
            self.advance(gap)
        return self.y

    def rule(self, *, width: float = 0.5, gap: float = 4.0) -> float:
        self.ensure_space(gap * 2)
        y = self.y + gap
        self.document.draw_line(self.layout.content_left, y, self.layout.content_right, y, width=width)
        return self.advance(gap * 2)

    def draw_image(self, data: bytes, width: float, height: float) -> float:
        if width > self.layout.content_width:
            height *= self.layout.content_width / width
            width = self.layout.content_width
        if height > self.page_capacity:
            width *= self.page_capacity / height
            height = self.page_capacity
        self.ensure_space(height)
        x = self.layout.content_left + (self.layout.content_width - width) / 2
        self.document.draw_image(x, self.y, width, height, data)
        return self.advance(height)

    # Tables ------------------------------------------------------------
    def _cell(self, text: str, style: ParagraphStyle) -> Paragraph:
        body = text.lstrip(" ")
        # Paragraph collapses whitespace; keep indentation as non-breaking spaces
        lead = "&nbsp;" * (len(text) - len(body))
        return Paragraph(lead + escape(body), style)

    def _cell_style(self, size: float, align: str, bold: bool, color: str) -> ParagraphStyle:
        key = (size, align, bold, color)
        style = self._styles.get(key)
        if style is None:
            style = ParagraphStyle(
                f"cell-{len(self._styles)}",
                fontName=self.layout.font_bold if bold else self.layout.font_regular,
                fontSize=size,
                leading=self.layout.leading(size),
                alignment=PARAGRAPH_ALIGN[align.upper()],
                textColor=colors.HexColor(color),
            )
            self._styles[key] = style
        return style

    def _build_table(self, spec: TableSpec, columns: Sequence[ColumnStyle], size: float) -> Table:
        theme = spec.theme
        padding = self.layout.cell_padding
        data: List[List[Paragraph]] = []
        if spec.head:
            data.append(
                [self._cell(str(text), self._cell_style(size, "CENTER", True, theme.head_text)) for text in spec.head]
            )
        for row in spec.rows:
            bold = row.is_emphasized(spec.label_column)
            cells = []
            for index, column in enumerate(columns):
                text = str(row.cells[index]) if index < len(row.cells) else ""
                color = row.cell_colors.get(index, BLACK)
                cells.append(self._cell(text, self._cell_style(size, column.align, bold, color)))
            data.append(cells)

        commands: List[Tuple[Any, ...]] = [
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), padding),
            ("TOPPADDING", (0, 0), (-1, -1), padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
        ]
        if spec.head:
            if theme.head_background:
                commands.append(("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(theme.head_background)))
            if theme.rule_below_head:
                commands.append(("LINEBELOW", (0, 0), (-1, 0), 0.75, colors.black))
        if theme.grid:
            commands.append(("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#8A8F98")))

        table = Table(data, colWidths=[c.width for c in columns], repeatRows=1 if spec.head else 0)
        table.setStyle(TableStyle(commands))
        return table

    def draw_table(self, spec: TableSpec) -> float:
        """Draw ``spec``, letting ReportLab split it across pages; the head row repeats on each piece."""
        if not spec.head and not spec.rows:
            return self.y
        size = spec.font_size or self.layout.table_size
        columns = list(spec.columns or compute_equal_column_styles(self.layout.content_width, spec.column_count))
        width = self.layout.content_width
        head = [tuple(str(text) for text in spec.head)] if spec.head else []
        pending = [(row.cells, row.is_emphasized(spec.label_column)) for row in spec.rows]

        table = self._build_table(spec, columns, size)
        while True:
            available = self.remaining
            _, height = table.wrap(width, available)
            if height <= available:
                self._record_table(table, head, pending, height)
                break
            pieces = table.split(width, available)
            if len(pieces) < 2:
                if self.at_top:
                    raise LayoutOverflow(f"Table row cannot fit on an empty page ({available:.1f}pt available)")
                self.new_page()
                continue
            first, table = pieces[0], pieces[1]
            _, first_height = first.wrap(width, available)
            taken = _row_count(first) - len(head)
            self._record_table(first, head, pending[:taken], first_height)
            pending = pending[taken:]
            self.new_page()
        return self.advance(spec.space_after)

    def _record_table(self, flowable: Table, head, rows, height: float) -> None:
        self.document.draw_table(
            TableOp(
                x=self.layout.content_left,
                y=self.y,
                width=self.layout.content_width,
                height=height,
                cells=tuple(head) + tuple(cells for cells, _ in rows),
                emphasized=tuple(True for _ in head) + tuple(bold for _, bold in rows),
                flowable=flowable,
            )
        )
        self.y += height


def _row_count(table: Table) -> int:
    # ReportLab exposes no public row count; split pieces keep their rows in _cellvalues
    return len(table._cellvalues)
