# src/statutory_filings/domain/entities/filing_context.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing context entity.

Purpose:
    Identify the legal entity and accounting period a filing relates to.
    The context is built by the calling business layer and is immutable for
    the lifetime of a submission.

Layer:
    domain
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from statutory_filings.domain.enums.filing import EntitySize

COMPANY_NUMBER_PATTERN = re.compile(r"^[A-Z0-9]{8}$")


def _one_year_before(day: date) -> date:
    """Return the same calendar day one year earlier (28 Feb for 29 Feb)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


@dataclass(frozen=True)
class ReportingPeriod:
    """Closed date interval of a reporting period."""

    start: date
    end: date


@dataclass(frozen=True)
class FilingContext:
    """Entity and period identification for a filing.

    Args:
        company_number: Registrar company number (8 upper-case alphanumerics).
        company_name: Registered legal name.
        period_start: First day of the accounting period.
        period_end: Last day of the accounting period.
        balance_sheet_date: Instant at which the balance sheet is drawn up.
        entity_size: Size classification selecting the disclosure schema.
        accounting_framework: Human-readable framework label (e.g. "FRS 102").
        currency: ISO 4217 reporting currency.
        comparative_start: Optional explicit start of the comparative period.
        comparative_end: Optional explicit end of the comparative period.
    """

    company_number: str
    company_name: str
    period_start: date
    period_end: date
    balance_sheet_date: date
    entity_size: EntitySize
    accounting_framework: str = "FRS 102"
    currency: str = "GBP"
    comparative_start: date | None = None
    comparative_end: date | None = None

    @property
    def current_period(self) -> ReportingPeriod:
        """Return the current reporting period."""
        return ReportingPeriod(self.period_start, self.period_end)

    @property
    def comparative_period(self) -> ReportingPeriod:
        """Return the comparative period.

        When no explicit comparative dates were supplied, the comparative
        period is the twelve months ending the day before ``period_start``.
        """
        end = self.comparative_end or (self.period_start - timedelta(days=1))
        start = self.comparative_start or (_one_year_before(end) + timedelta(days=1))
        return ReportingPeriod(start, end)

    @property
    def comparative_balance_sheet_date(self) -> date:
        """Return the balance sheet instant of the comparative period."""
        return self.comparative_period.end

    def validate(self) -> list[str]:
        """Return rule violations for the context; empty when valid."""
        errors: list[str] = []
        if not COMPANY_NUMBER_PATTERN.match(self.company_number or ""):
            errors.append("Invalid company number format")
        if not (self.company_name or "").strip():
            errors.append("Company name is required")
        if self.period_end < self.period_start:
            errors.append("Accounting period end must not be before its start")
        if not (self.currency or "").strip():
            errors.append("Reporting currency is required")
        return errors
