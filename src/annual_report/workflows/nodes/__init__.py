"""Convenience re-exports for workflow nodes."""
from __future__ import annotations

from . import aggregate, compose, data_load, serialize

__all__ = [
    "data_load",
    "aggregate",
    "compose",
    "serialize",
]
