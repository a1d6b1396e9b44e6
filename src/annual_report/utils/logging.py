"""Rich-backed logging setup shared by the CLI and the report workflow."""
from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler

# Third-party loggers that flood DEBUG output while charts and PDFs are built.
NOISY_LOGGERS = ("matplotlib", "PIL", "fontTools", "sqlalchemy.engine")

_LOGGER_CONFIGURED = False


def configure_logging(debug: bool = False, *, level: Optional[int] = None) -> None:
    """Install a single RichHandler on the root logger; repeated calls are ignored."""
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    resolved_level = level or (logging.DEBUG if debug else logging.INFO)
    logging.basicConfig(
        level=resolved_level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=debug, show_path=debug)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
    _LOGGER_CONFIGURED = True
