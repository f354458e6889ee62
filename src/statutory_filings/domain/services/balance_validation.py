# src/statutory_filings/domain/services/balance_validation.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Accounting identity checks.

Purpose:
    Enforce ``net assets == total equity`` on every balance sheet of a
    statement set, and the cash reconciliation of any cash flow statement,
    before anything is tagged or submitted.

Layer:
    domain
"""

from __future__ import annotations

from decimal import Decimal

from statutory_filings.domain.entities.financial_statements import (
    BalanceSheetData,
    CashFlowData,
    FinancialStatementSet,
)
from statutory_filings.domain.exceptions.filing import BalanceSheetImbalanceError
from statutory_filings.domain.value_objects.money import BALANCE_TOLERANCE


def balance_discrepancy(balance_sheet: BalanceSheetData) -> Decimal:
    """Return the signed difference ``net_assets - total_equity``."""
    return balance_sheet.discrepancy


def check_balance_sheet(balance_sheet: BalanceSheetData, *, period: str = "current") -> None:
    """Raise if the balance sheet does not balance within one minor unit.

    Raises:
        BalanceSheetImbalanceError: Carrying the exact signed discrepancy.
    """
    if abs(balance_sheet.discrepancy) > BALANCE_TOLERANCE:
        raise BalanceSheetImbalanceError(
            net_assets=balance_sheet.net_assets,
            total_equity=balance_sheet.total_equity,
            period=period,
        )


def check_statement_set(statements: FinancialStatementSet) -> None:
    """Check the current and, when present, comparative balance sheets."""
    check_balance_sheet(statements.balance_sheet.current, period="current")
    if statements.balance_sheet.previous is not None:
        check_balance_sheet(statements.balance_sheet.previous, period="previous")


def cash_flow_errors(cash_flow: CashFlowData, *, period: str = "current") -> list[str]:
    """Return a message when closing cash does not reconcile to the flows."""
    difference = cash_flow.reconciliation_difference
    if abs(difference) <= BALANCE_TOLERANCE:
        return []
    return [
        f"Cash flow ({period}) does not reconcile: closing cash {cash_flow.closing_cash:,} "
        f"differs from opening cash plus net flows by {difference:,}"
    ]


def balance_errors(statements: FinancialStatementSet) -> list[str]:
    """Collect balance and cash reconciliation failures as messages."""
    errors: list[str] = []
    for period, sheet in (
        ("current", statements.balance_sheet.current),
        ("previous", statements.balance_sheet.previous),
    ):
        if sheet is None:
            continue
        try:
            check_balance_sheet(sheet, period=period)
        except BalanceSheetImbalanceError as exc:
            errors.append(exc.message)
    if statements.cash_flow is not None:
        errors.extend(cash_flow_errors(statements.cash_flow.current, period="current"))
        if statements.cash_flow.previous is not None:
            errors.extend(cash_flow_errors(statements.cash_flow.previous, period="previous"))
    return errors
