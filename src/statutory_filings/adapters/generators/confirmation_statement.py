# src/statutory_filings/adapters/generators/confirmation_statement.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Confirmation statement (CS01) body generator.

Purpose:
    Validate confirmation statement particulars and render the
    ``ConfirmationStatement`` body carried inside the Companies House
    GovTalk envelope.

Layer:
    adapters/generators

Notes:
    - ``validate_confirmation_statement`` returns every violation in
      evaluation order; orchestrators call it before anything is charged or
      sent.
    - Rendering is pure and deterministic.
"""

from __future__ import annotations

from typing import Final

from statutory_filings.adapters.generators.common import (
    CH_SCHEMA_NS,
    EMAIL_PATTERN,
    BodyBuilder,
    serialize,
    xml_unsafe_errors,
)
from statutory_filings.domain.entities.confirmation_statement import ConfirmationStatementData
from statutory_filings.domain.enums.filing import RegisterLocation, TradingStatus

CS01_TRANSACTION_PREFIX: Final[str] = "CS01"

_REGISTER_LOCATIONS: Final[dict[RegisterLocation, str]] = {
    RegisterLocation.REGISTERED_OFFICE: "RegisteredOffice",
    RegisterLocation.SAIL_ADDRESS: "SAILAddress",
    RegisterLocation.OTHER: "OtherAddress",
}


def validate_confirmation_statement(data: ConfirmationStatementData) -> list[str]:
    """Return rule violations for a confirmation statement; empty when valid."""
    errors: list[str] = []
    if not data.company_number or len(data.company_number.strip()) < 8:
        errors.append("Company number must be at least 8 characters")
    if not (data.company_name or "").strip():
        errors.append("Company name is required")
    if not data.registered_office.is_complete():
        errors.append("Registered office address must include a first line, city and postcode")
    if not data.registered_email or not EMAIL_PATTERN.match(data.registered_email):
        errors.append("Valid registered email address is required")
    if not [code for code in data.sic_codes if code.strip()]:
        errors.append("At least one SIC code is required")
    if not data.directors:
        errors.append("At least one director is required")
    if not data.shareholders:
        errors.append("At least one shareholder is required")
    if not data.share_classes:
        errors.append("At least one share class is required")
    else:
        declared = {share_class.name for share_class in data.share_classes}
        for holder in data.shareholders:
            if holder.share_class not in declared:
                errors.append(f"Shareholder {holder.name} holds undeclared share class {holder.share_class}")
    for psc in data.persons_with_significant_control:
        if not psc.natures_of_control:
            errors.append(f"Person with significant control {psc.name} needs at least one nature of control")
    if not data.lawful_purpose_confirmed:
        errors.append("Statement of lawful purposes must be confirmed")
    if data.made_up_to_date is None:
        errors.append("Made up to date is required")
    if data.statement_date is None:
        errors.append("Statement date is required")
    if data.trades_on_stock_exchange and not (data.stock_exchange_name or "").strip():
        errors.append("Stock exchange name is required when trading on a stock exchange")
    if (
        data.register_location is not RegisterLocation.REGISTERED_OFFICE
        and data.register_inspection_address is None
    ):
        errors.append("Inspection address is required when registers are not kept at the registered office")
    errors.extend(xml_unsafe_errors(data, "confirmation_statement"))
    return errors


def generate_confirmation_statement_body(data: ConfirmationStatementData) -> str:
    """Render the ``ConfirmationStatement`` body fragment."""
    b = BodyBuilder(CH_SCHEMA_NS)
    root = b.root("ConfirmationStatement")
    b.sub(root, "CompanyNumber", data.company_number)
    b.sub(root, "CompanyName", data.company_name)
    if data.made_up_to_date is not None:
        b.sub(root, "MadeUpToDate", data.made_up_to_date)
    if data.statement_date is not None:
        b.sub(root, "StatementDate", data.statement_date)
    b.address(root, "RegisteredOffice", data.registered_office)
    b.sub(root, "RegisteredEmailAddress", data.registered_email)

    sic_codes = b.sub(root, "SICCodes")
    for code in data.sic_codes:
        if code.strip():
            b.sub(sic_codes, "SICCode", code.strip())

    b.sub(root, "TradingStatus", "Trading" if data.trading_status is TradingStatus.TRADING else "Dormant")
    if data.trades_on_stock_exchange and data.stock_exchange_name:
        b.sub(b.sub(root, "StockExchange"), "Name", data.stock_exchange_name)

    directors = b.sub(root, "Directors")
    for director in data.directors:
        el = b.sub(directors, "Director")
        b.sub(el, "Name", director.name)
        if director.appointment_date is not None:
            b.sub(el, "AppointmentDate", director.appointment_date)

    if data.persons_with_significant_control:
        pscs = b.sub(root, "PersonsWithSignificantControl")
        for psc in data.persons_with_significant_control:
            el = b.sub(pscs, "PSC")
            b.sub(el, "Name", psc.name)
            b.sub(el, "Nationality", psc.nationality)
            b.sub(el, "DateOfBirth", psc.date_of_birth)
            b.address(el, "ServiceAddress", psc.service_address)
            natures = b.sub(el, "NaturesOfControl")
            for nature in psc.natures_of_control:
                b.sub(natures, "NatureOfControl", nature)
            if psc.notified_on is not None:
                b.sub(el, "NotifiedOn", psc.notified_on)

    shareholders = b.sub(root, "Shareholders")
    for holder in data.shareholders:
        el = b.sub(shareholders, "Shareholder")
        b.sub(el, "Name", holder.name)
        b.sub(el, "SharesHeld", holder.shares_held)
        b.sub(el, "ShareClass", holder.share_class)

    share_classes = b.sub(root, "ShareClasses")
    for share_class in data.share_classes:
        el = b.sub(share_classes, "ShareClass")
        b.sub(el, "ClassName", share_class.name)
        b.sub(el, "Currency", share_class.currency)
        b.sub(el, "TotalShares", share_class.total_shares)
        b.sub(el, "NominalValue", str(share_class.nominal_value))
        rights = b.sub(el, "Rights")
        b.sub(rights, "VotingRights", share_class.voting_rights)
        b.sub(rights, "DividendRights", share_class.dividend_rights)
        b.sub(rights, "CapitalRights", share_class.capital_rights)
        b.sub(rights, "RestrictionOnTransfer", share_class.transfer_restricted)

    capital = data.derived_statement_of_capital
    statement = b.sub(root, "StatementOfCapital")
    b.sub(statement, "Currency", capital.currency)
    b.sub(statement, "AggregateNominalValue", capital.aggregate_nominal_value)
    b.sub(statement, "AmountPaidUp", capital.total_paid)
    b.sub(statement, "AmountUnpaid", capital.total_unpaid)

    registers = b.sub(root, "StatutoryRegisters")
    b.sub(registers, "Location", _REGISTER_LOCATIONS[data.register_location])
    if (
        data.register_location is not RegisterLocation.REGISTERED_OFFICE
        and data.register_inspection_address is not None
    ):
        b.address(registers, "InspectionAddress", data.register_inspection_address)

    declarations = b.sub(root, "Declarations")
    b.sub(
        declarations,
        "StatementOfLawfulPurposes",
        "Confirmed" if data.lawful_purpose_confirmed else "Not Confirmed",
    )
    return serialize(root)


__all__ = [
    "CS01_TRANSACTION_PREFIX",
    "generate_confirmation_statement_body",
    "validate_confirmation_statement",
]
