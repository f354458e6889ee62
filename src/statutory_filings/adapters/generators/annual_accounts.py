# src/statutory_filings/adapters/generators/annual_accounts.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Annual accounts body generator.

Purpose:
    Validate a statement set against its filing context and render the
    ``AccountsData`` body that carries the packaged iXBRL documents to
    Companies House.

Layer:
    adapters/generators
"""

from __future__ import annotations

from typing import Final

from statutory_filings.adapters.generators.common import (
    CH_SCHEMA_NS,
    BodyBuilder,
    serialize,
    xml_unsafe_errors,
)
from statutory_filings.domain.entities.filing_context import FilingContext
from statutory_filings.domain.entities.financial_statements import FinancialStatementSet
from statutory_filings.domain.enums.filing import EntitySize
from statutory_filings.domain.services.balance_validation import balance_errors
from statutory_filings.domain.services.entity_size import (
    EntityMetrics,
    classify_entity_size,
    permits_declared_size,
    requires_cash_flow,
    requires_strategic_report,
)
from statutory_filings.domain.value_objects.money import BALANCE_TOLERANCE

ACCOUNTS_TRANSACTION_PREFIX: Final[str] = "AA"
ACCOUNTS_FORMAT: Final[str] = "iXBRL"


def accounts_type_for(size: EntitySize) -> str:
    """Return the registrar accounts type for an entity size."""
    match size:
        case EntitySize.MICRO:
            return "MicroEntity"
        case EntitySize.SMALL:
            return "SmallFull"
        case EntitySize.MEDIUM:
            return "MediumFull"
        case EntitySize.LARGE:
            return "FullAccounts"


def validate_annual_accounts(context: FilingContext, statements: FinancialStatementSet) -> list[str]:
    """Return rule violations for an accounts filing; empty when valid."""
    errors = context.validate()
    if context.balance_sheet_date < context.period_start or context.balance_sheet_date > context.period_end:
        errors.append("Balance sheet date must fall within the accounting period")
    if not (context.accounting_framework or "").strip():
        errors.append("Accounting framework is required")

    report = statements.directors_report
    if not report.directors:
        errors.append("At least one director is required")
    if report.approval_date is None:
        errors.append("Director approval date is required")
    if not (report.signing_director or "").strip():
        errors.append("Director signature is required")
    if not (report.principal_activities or "").strip():
        errors.append("Principal activities are required")
    if not (statements.notes.accounting_policies.accounting_framework or "").strip():
        errors.append("Accounting policies must state the accounting framework")

    size = context.entity_size
    if requires_strategic_report(size) and statements.strategic_report is None:
        errors.append("A strategic report is required for large companies")
    if requires_cash_flow(size) and statements.cash_flow is None:
        errors.append("A cash flow statement is required for medium and large companies")
    if statements.notes.average_employees is not None:
        classified = classify_entity_size(
            EntityMetrics(
                turnover=statements.profit_loss.current.turnover,
                balance_sheet_total=statements.balance_sheet.current.total_assets,
                employees=statements.notes.average_employees,
            )
        )
        if not permits_declared_size(size, classified):
            errors.append(
                f"Declared entity size {size.value} is below the {classified.size.value} size "
                "the reported figures qualify for"
            )

    if statements.cash_flow is not None:
        pairs = [("current", statements.cash_flow.current, statements.profit_loss.current)]
        if statements.cash_flow.previous is not None and statements.profit_loss.previous is not None:
            pairs.append(("previous", statements.cash_flow.previous, statements.profit_loss.previous))
        for period, cash_flow, profit_loss in pairs:
            if abs(cash_flow.profit_before_tax - profit_loss.profit_before_tax) > BALANCE_TOLERANCE:
                errors.append(
                    f"Cash flow ({period}) profit before tax does not match the profit and loss account"
                )

    errors.extend(balance_errors(statements))
    errors.extend(xml_unsafe_errors(context, "context"))
    errors.extend(xml_unsafe_errors(statements, "statements"))
    return errors


def generate_annual_accounts_body(context: FilingContext, package: str) -> str:
    """Render the ``AccountsData`` body fragment.

    Args:
        context: Entity and period identification.
        package: Base64 ZIP produced by ``package_for_submission``.
    """
    b = BodyBuilder(CH_SCHEMA_NS)
    root = b.root("AccountsData")
    b.sub(root, "CompanyNumber", context.company_number)
    b.sub(root, "CompanyName", context.company_name)
    b.sub(root, "AccountsType", accounts_type_for(context.entity_size))
    b.sub(root, "PeriodEndDate", context.period_end)
    b.sub(root, "AccountsFormat", ACCOUNTS_FORMAT)
    b.sub(root, "Package", package).set("encoding", "base64")
    return serialize(root)


__all__ = [
    "ACCOUNTS_TRANSACTION_PREFIX",
    "accounts_type_for",
    "generate_annual_accounts_body",
    "validate_annual_accounts",
]
