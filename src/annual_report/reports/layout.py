"""Page geometry and typography shared by the document and every section builder."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from reportlab.lib.pagesizes import A4, LETTER

from annual_report.reports.formatting import GROUPINGS, mm_to_pt, px_to_mm

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}


@dataclass(frozen=True)
class ReportLayoutConfig:
    """All measurements are PostScript points measured from the page top."""

    page_size: Tuple[float, float] = A4
    margin_top: float = mm_to_pt(px_to_mm(40))
    margin_bottom: float = mm_to_pt(px_to_mm(40))
    margin_left: float = mm_to_pt(px_to_mm(35))
    margin_right: float = mm_to_pt(px_to_mm(35))
    footer_height: float = mm_to_pt(30)
    section_spacing: float = 14.0
    font_regular: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"
    title_size: float = 22.0
    header_size: float = 15.0
    subheader_size: float = 12.0
    body_size: float = 10.0
    table_size: float = 9.0
    small_size: float = 8.0
    line_height: float = 1.35
    cell_padding: float = 3.0
    number_grouping: str = "international"

    def __post_init__(self) -> None:
        if self.number_grouping not in GROUPINGS:
            raise ValueError(f"Unsupported number grouping {self.number_grouping!r}")
        if self.content_bottom <= self.content_top:
            raise ValueError("Margins and footer leave no room for content.")

    @classmethod
    def from_config(cls, config) -> "ReportLayoutConfig":
        page = PAGE_SIZES.get(str(config.page_size).upper())
        if page is None:
            raise ValueError(f"Unsupported page size {config.page_size!r}; choose from {sorted(PAGE_SIZES)}")
        return cls(page_size=page, number_grouping=config.number_grouping)

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def content_left(self) -> float:
        return self.margin_left

    @property
    def content_right(self) -> float:
        return self.page_width - self.margin_right

    @property
    def content_width(self) -> float:
        return self.content_right - self.content_left

    @property
    def content_top(self) -> float:
        return self.margin_top

    @property
    def content_bottom(self) -> float:
        """Lowest y any section may draw at; the footer band lies below it."""
        return self.page_height - self.margin_bottom - self.footer_height

    @property
    def footer_top(self) -> float:
        return self.content_bottom

    def leading(self, size: float) -> float:
        return size * self.line_height

    def with_grouping(self, grouping: str) -> "ReportLayoutConfig":
        return replace(self, number_grouping=grouping)
