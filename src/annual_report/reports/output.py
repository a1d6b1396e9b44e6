"""Validation and persistence of the serialized PDF."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Union

from annual_report.domain.errors import InvalidDocument
from annual_report.domain.models.financials import FiscalYear

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
FAILED_SUFFIX = ".failed.txt"


def validate_pdf_bytes(payload: bytes) -> bool:
    return bool(payload) and payload[: len(PDF_MAGIC)] == PDF_MAGIC


def failed_output_path(path: Union[str, Path]) -> Path:
    path = Path(path)
    return path.with_name(path.name + FAILED_SUFFIX)


def write_report(payload: bytes, path: Union[str, Path]) -> Path:
    """Write a PDF; invalid payloads go to ``<path>.failed.txt`` and raise ``InvalidDocument``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not validate_pdf_bytes(payload):
        sidecar = failed_output_path(path)
        sidecar.write_bytes(payload or b"")
        logger.error("Output is not a PDF (%d bytes); raw bytes saved to %s", len(payload or b""), sidecar)
        raise InvalidDocument(f"Generated output is not a valid PDF; raw bytes written to {sidecar}")
    path.write_bytes(payload)
    logger.info("Wrote %s (%d bytes)", path, len(payload))
    return path


def default_report_filename(fiscal_year: FiscalYear, company_name: str = "", kind: str = "annual_report") -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", company_name.lower()).strip("-")
    prefix = kind.replace("_", "-")
    stem = f"{prefix}-{fiscal_year.label}"
    return f"{slug}-{stem}.pdf" if slug else f"{stem}.pdf"
