# src/statutory_filings/adapters/generators/corporation_tax.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Corporation tax return (CT600) body generator.

Renders the ``IRbody`` that follows the ``IRheader`` inside the HMRC
``IRenvelope``. The header itself, including the IRmark, belongs to the
mark-based authenticator.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Final

from statutory_filings.adapters.generators.common import BodyBuilder, serialize, xml_unsafe_errors
from statutory_filings.adapters.govtalk.auth import HMRC_CT_NS
from statutory_filings.domain.entities.corporation_tax import CorporationTaxReturnData

CT600_TRANSACTION_PREFIX: Final[str] = "CT600"
DECLARATION_TEXT: Final[str] = (
    "The information given in this return is correct and complete to the best of my "
    "knowledge and belief."
)

_UTR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{10}$")


def validate_corporation_tax_return(data: CorporationTaxReturnData) -> list[str]:
    """Return rule violations for a CT600 return; empty when valid."""
    errors: list[str] = []
    if not _UTR_PATTERN.match(data.utr or ""):
        errors.append("UTR must be 10 digits")
    if not (data.company_number or "").strip():
        errors.append("Company registration number is required")
    if not (data.company_name or "").strip():
        errors.append("Company name is required")
    if data.period_end < data.period_start:
        errors.append("Accounting period end must not be before its start")
    if data.turnover < 0:
        errors.append("Turnover cannot be negative")
    if data.taxable_profit < 0:
        errors.append("Taxable profit cannot be negative")
    if not (Decimal(0) < data.tax_rate <= Decimal(100)):
        errors.append("Tax rate must be greater than 0 and at most 100")
    if data.tax_paid < 0:
        errors.append("Tax paid cannot be negative")
    if not (data.declarant_name or "").strip():
        errors.append("Declarant name is required")
    errors.extend(xml_unsafe_errors(data, "return"))
    return errors


def generate_corporation_tax_body(data: CorporationTaxReturnData) -> str:
    """Render the ``IRbody`` fragment of a CT600 return."""
    b = BodyBuilder(HMRC_CT_NS)
    body = b.root("IRbody")
    ct600 = b.sub(body, "CompanyTaxReturn")
    ct600.set("ReturnType", "new")

    company = b.sub(ct600, "CompanyInformation")
    b.sub(company, "CompanyName", data.company_name)
    b.sub(company, "RegistrationNumber", data.company_number)
    b.sub(company, "Reference", data.utr)
    b.sub(company, "CompanyType", "6")
    period = b.sub(company, "PeriodCovered")
    b.sub(period, "From", data.period_start)
    b.sub(period, "To", data.period_end)

    summary = b.sub(ct600, "ReturnInfoSummary")
    accounts = b.sub(summary, "Accounts")
    b.sub(accounts, "ThisPeriodAccounts", "yes")
    computations = b.sub(summary, "Computations")
    b.sub(computations, "ThisPeriodComputations", "yes")

    b.sub(b.sub(ct600, "Turnover"), "Total", data.turnover)

    calculation = b.sub(ct600, "CompanyTaxCalculation")
    b.sub(calculation, "ProfitsChargeable", data.taxable_profit)
    financial_year = b.sub(calculation, "FinancialYearOne")
    b.sub(financial_year, "Year", data.period_end.year)
    details = b.sub(financial_year, "Details")
    b.sub(details, "Profit", data.taxable_profit)
    b.sub(details, "TaxRate", str(data.tax_rate))
    b.sub(details, "Tax", data.tax_due)
    b.sub(calculation, "CorporationTaxChargeable", data.tax_due)

    outstanding = b.sub(ct600, "CalculationOfTaxOutstandingOrOverpaid")
    b.sub(outstanding, "TaxChargeable", data.tax_due)
    b.sub(outstanding, "TaxPaid", data.tax_paid)
    b.sub(outstanding, "TaxPayable", data.tax_payable)

    declaration = b.sub(ct600, "Declaration")
    b.sub(declaration, "AcceptDeclaration", "yes")
    b.sub(declaration, "Name", data.declarant_name)
    b.sub(declaration, "Status", data.declarant_status)
    b.sub(declaration, "Date", data.declaration_date)
    b.sub(declaration, "Text", DECLARATION_TEXT)
    return serialize(body)


__all__ = [
    "CT600_TRANSACTION_PREFIX",
    "generate_corporation_tax_body",
    "validate_corporation_tax_return",
]
