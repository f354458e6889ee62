# src/statutory_filings/domain/services/entity_size.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Entity size classification.

Purpose:
    Classify a company as micro, small, medium or large from its turnover,
    balance sheet total and average headcount, using the Companies Act
    "two of three criteria" rule. The size drives the disclosure schema and
    which statements the tagged document contains.

Layer:
    domain

Design:
    - Pure domain: no I/O, Decimal arithmetic only.
    - Thresholds are inclusive upper bounds.
    - When two years are supplied, a size applies only if the company
      qualifies for it in both years.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from statutory_filings.domain.enums.filing import EntitySize, ProfitLossFormat
from statutory_filings.domain.value_objects.money import coerce_decimal_fields

# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SizeThreshold:
    turnover: Decimal
    balance_sheet_total: Decimal
    employees: int


THRESHOLDS: Final[dict[EntitySize, SizeThreshold]] = {
    EntitySize.MICRO: SizeThreshold(Decimal("632000"), Decimal("316000"), 10),
    EntitySize.SMALL: SizeThreshold(Decimal("10200000"), Decimal("5100000"), 50),
    EntitySize.MEDIUM: SizeThreshold(Decimal("36000000"), Decimal("18000000"), 250),
}

# Evaluation order: smallest qualifying category wins.
_ORDER: Final[tuple[EntitySize, ...]] = (EntitySize.MICRO, EntitySize.SMALL, EntitySize.MEDIUM)
_RANK: Final[tuple[EntitySize, ...]] = (*_ORDER, EntitySize.LARGE)


@dataclass(frozen=True)
class EntityMetrics:
    """Size criteria for one financial year."""

    turnover: Decimal
    balance_sheet_total: Decimal
    employees: int

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class EntitySizeResult:
    """Classification outcome.

    Attributes:
        size: Smallest category the company qualifies for (LARGE if none).
        qualifies_as: Every category met, smallest first.
        requires_audit: True for medium and large companies.
    """

    size: EntitySize
    qualifies_as: tuple[EntitySize, ...]
    requires_audit: bool

    @property
    def can_use_micro_entity_regime(self) -> bool:
        return self.size is EntitySize.MICRO

    @property
    def can_file_abridged(self) -> bool:
        return self.size in (EntitySize.MICRO, EntitySize.SMALL)


def _meets(metrics: EntityMetrics, threshold: SizeThreshold) -> bool:
    met = (
        metrics.turnover <= threshold.turnover,
        metrics.balance_sheet_total <= threshold.balance_sheet_total,
        metrics.employees <= threshold.employees,
    )
    return sum(met) >= 2


def _qualifying(metrics: EntityMetrics) -> tuple[EntitySize, ...]:
    return tuple(size for size in _ORDER if _meets(metrics, THRESHOLDS[size]))


def _result(qualifies_as: tuple[EntitySize, ...]) -> EntitySizeResult:
    size = qualifies_as[0] if qualifies_as else EntitySize.LARGE
    return EntitySizeResult(
        size=size,
        qualifies_as=qualifies_as,
        requires_audit=size in (EntitySize.MEDIUM, EntitySize.LARGE),
    )


def classify_entity_size(
    current: EntityMetrics,
    previous: EntityMetrics | None = None,
) -> EntitySizeResult:
    """Classify a company by size.

    Args:
        current: Metrics for the financial year being reported.
        previous: Optional metrics for the prior year. When given, only
            categories met in both years count.

    Returns:
        The classification result.
    """
    qualifies_now = _qualifying(current)
    if previous is None:
        return _result(qualifies_now)
    qualifies_before = set(_qualifying(previous))
    return _result(tuple(size for size in qualifies_now if size in qualifies_before))


def permits_declared_size(declared: EntitySize, result: EntitySizeResult) -> bool:
    """Return True when a company classified as ``result`` may report as ``declared``.

    A company may always give the fuller disclosures of a larger category,
    never the reduced disclosures of a smaller one.
    """
    return _RANK.index(declared) >= _RANK.index(result.size)


def profit_loss_format_for(size: EntitySize) -> ProfitLossFormat:
    """Return the profit and loss presentation depth for an entity size."""
    match size:
        case EntitySize.MICRO:
            return ProfitLossFormat.ABRIDGED
        case EntitySize.SMALL:
            return ProfitLossFormat.STANDARD
        case EntitySize.MEDIUM | EntitySize.LARGE:
            return ProfitLossFormat.DETAILED


def requires_cash_flow(size: EntitySize) -> bool:
    match size:
        case EntitySize.MICRO | EntitySize.SMALL:
            return False
        case EntitySize.MEDIUM | EntitySize.LARGE:
            return True


def requires_strategic_report(size: EntitySize) -> bool:
    match size:
        case EntitySize.LARGE:
            return True
        case EntitySize.MICRO | EntitySize.SMALL | EntitySize.MEDIUM:
            return False


__all__ = [
    "THRESHOLDS",
    "EntityMetrics",
    "EntitySizeResult",
    "SizeThreshold",
    "classify_entity_size",
    "permits_declared_size",
    "profit_loss_format_for",
    "requires_cash_flow",
    "requires_strategic_report",
]
