# src/statutory_filings/domain/entities/confirmation_statement.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Confirmation statement (CS01) entities.

Purpose:
    Typed input for the annual confirmation statement: registered office,
    officers, persons with significant control, shareholders, share classes,
    statement of capital and statutory register location.

Layer:
    domain
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from statutory_filings.domain.entities.financial_statements import Director
from statutory_filings.domain.enums.filing import RegisterLocation, TradingStatus
from statutory_filings.domain.value_objects.money import ZERO, coerce_decimal_fields

DEFAULT_COUNTRY = "United Kingdom"


@dataclass(frozen=True)
class Address:
    """Postal address with structured lines.

    ``lines`` holds the street lines in order; the registrar schema carries
    at most two of them.
    """

    lines: Sequence[str]
    city: str
    postcode: str
    country: str = DEFAULT_COUNTRY

    @classmethod
    def from_text(cls, text: str, *, country: str = DEFAULT_COUNTRY) -> Address:
        """Build an address from a comma-separated single-line form.

        The last component is taken as the postcode and the one before it as
        the city; everything earlier becomes street lines.
        """
        parts = [p.strip() for p in text.split(",") if p.strip()]
        if len(parts) < 3:
            city = parts[1] if len(parts) > 1 else ""
            return cls(lines=tuple(parts[:1]), city=city, postcode="", country=country)
        return cls(lines=tuple(parts[:-2]), city=parts[-2], postcode=parts[-1], country=country)

    def is_complete(self) -> bool:
        first_line = self.lines[0].strip() if self.lines else ""
        return bool(first_line and self.city.strip() and self.postcode.strip())


@dataclass(frozen=True)
class PersonWithSignificantControl:
    name: str
    nationality: str
    date_of_birth: date
    service_address: Address
    natures_of_control: Sequence[str]
    notified_on: date | None = None


@dataclass(frozen=True)
class Shareholder:
    name: str
    shares_held: int
    share_class: str = "Ordinary"


@dataclass(frozen=True)
class ShareClass:
    """One class of issued shares and its prescribed particulars."""

    name: str
    total_shares: int
    nominal_value: Decimal
    currency: str = "GBP"
    voting_rights: str = "One vote per share"
    dividend_rights: str = "Full participation"
    capital_rights: str = "Full participation on winding up"
    transfer_restricted: bool = False

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def aggregate_nominal_value(self) -> Decimal:
        return self.nominal_value * self.total_shares


@dataclass(frozen=True)
class StatementOfCapital:
    currency: str
    aggregate_nominal_value: Decimal
    total_paid: Decimal
    total_unpaid: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class ConfirmationStatementData:
    """All particulars confirmed by an annual confirmation statement."""

    company_number: str
    company_name: str
    registered_office: Address
    registered_email: str
    sic_codes: Sequence[str]
    directors: Sequence[Director]
    shareholders: Sequence[Shareholder]
    share_classes: Sequence[ShareClass]
    statement_date: date | None
    made_up_to_date: date | None
    lawful_purpose_confirmed: bool
    persons_with_significant_control: Sequence[PersonWithSignificantControl] = ()
    statement_of_capital: StatementOfCapital | None = None
    trading_status: TradingStatus = TradingStatus.TRADING
    trades_on_stock_exchange: bool = False
    stock_exchange_name: str | None = None
    register_location: RegisterLocation = RegisterLocation.REGISTERED_OFFICE
    register_inspection_address: Address | None = None

    @property
    def derived_statement_of_capital(self) -> StatementOfCapital:
        """Return the declared statement of capital, or one derived from share classes."""
        if self.statement_of_capital is not None:
            return self.statement_of_capital
        currency = self.share_classes[0].currency if self.share_classes else "GBP"
        total = sum((sc.aggregate_nominal_value for sc in self.share_classes), ZERO)
        return StatementOfCapital(currency=currency, aggregate_nominal_value=total, total_paid=total)
