"""Prose rendering for the narrative sections using Jinja2 templates."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from annual_report.reports.formatting import format_currency

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


@dataclass
class ReportRenderer:
    """Render narrative text blocks from structured report context."""

    template_dir: Path = field(default=TEMPLATE_DIR)
    grouping: str = "international"

    def __post_init__(self) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["currency"] = lambda value: format_currency(value, self.grouping)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context)

    def render_paragraphs(self, template_name: str, context: Dict[str, Any]) -> List[str]:
        """Render and split on blank lines; a lone ``.`` line marks extra vertical space."""
        text = self.render_template(template_name, context).strip()
        paragraphs = []
        for block in _PARAGRAPH_BREAK.split(text):
            block = " ".join(line.strip() for line in block.strip().splitlines())
            paragraphs.append("" if block == "." else block)
        return paragraphs
