# src/statutory_filings/domain/entities/corporation_tax.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Corporation tax return (CT600) entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from statutory_filings.domain.value_objects.money import ZERO, coerce_decimal_fields

_PENNY = Decimal("0.01")


@dataclass(frozen=True)
class CorporationTaxReturnData:
    """Summary figures of a company tax return for one accounting period.

    Args:
        utr: Ten-digit unique taxpayer reference.
        tax_rate: Percentage rate applied to the taxable profit (e.g. ``25``).
        tax_paid: Instalments already paid for the period.
    """

    utr: str
    company_number: str
    company_name: str
    period_start: date
    period_end: date
    turnover: Decimal
    taxable_profit: Decimal
    tax_rate: Decimal
    declarant_name: str
    declaration_date: date
    tax_paid: Decimal = ZERO
    declarant_status: str = "Director"

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def tax_due(self) -> Decimal:
        """Return tax chargeable on the taxable profit, rounded to the penny."""
        return (self.taxable_profit * self.tax_rate / Decimal(100)).quantize(
            _PENNY, rounding=ROUND_HALF_UP
        )

    @property
    def tax_payable(self) -> Decimal:
        """Return tax still payable after instalments (never negative)."""
        return max(self.tax_due - self.tax_paid, ZERO)
