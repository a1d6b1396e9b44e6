"""Pluggable income-tax estimation used by the aggregator and the tax schedules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class TaxPolicy(Protocol):
    """Estimate current tax from profit before tax."""

    rate: float
    cess_rate: float

    def estimate(self, profit_before_tax: float) -> float:
        ...

    def cess(self, tax: float) -> float:
        ...


def _percent(rate: float) -> str:
    return f"{rate * 100:g}%"


@dataclass(frozen=True)
class FlatRateTaxPolicy:
    """Flat rate on positive profit; loss years pay no tax."""

    rate: float = 0.25
    cess_rate: float = 0.04

    def __post_init__(self) -> None:
        if self.rate < 0 or self.cess_rate < 0:
            raise ValueError("Tax and cess rates must be non-negative.")

    def estimate(self, profit_before_tax: float) -> float:
        if profit_before_tax <= 0:
            return 0.0
        return profit_before_tax * self.rate

    def cess(self, tax: float) -> float:
        return tax * self.cess_rate


def rate_label(policy: TaxPolicy) -> str:
    return _percent(policy.rate)


def cess_label(policy: TaxPolicy) -> str:
    return _percent(policy.cess_rate)
