# tests/unit/domain/services/test_balance_validation.py
from __future__ import annotations

from decimal import Decimal

import pytest

from statutory_filings.domain.entities.financial_statements import CashFlowData
from statutory_filings.domain.exceptions.filing import (
    BalanceSheetImbalanceError,
    FilingValidationError,
)
from statutory_filings.domain.services.balance_validation import (
    balance_discrepancy,
    balance_errors,
    cash_flow_errors,
    check_balance_sheet,
    check_statement_set,
)
from tests.fixtures.filings_testkit import balance_sheet, statement_set


def test_balanced_scenario_passes() -> None:
    sheet = balance_sheet()

    assert sheet.net_assets == Decimal("120000")
    assert sheet.total_equity == Decimal("120000")
    assert balance_discrepancy(sheet) == Decimal("0")
    check_balance_sheet(sheet)


def test_unbalanced_scenario_reports_exact_discrepancy() -> None:
    sheet = balance_sheet(profit_and_loss="109000")

    with pytest.raises(BalanceSheetImbalanceError) as exc_info:
        check_balance_sheet(sheet)

    err = exc_info.value
    assert err.discrepancy == Decimal("1000")
    assert err.net_assets == Decimal("120000")
    assert err.total_equity == Decimal("119000")
    assert err.period == "current"
    assert err.details["discrepancy"] == "1000"
    assert isinstance(err, FilingValidationError)


def test_discrepancy_within_one_penny_is_tolerated() -> None:
    check_balance_sheet(balance_sheet(profit_and_loss="109999.99"))

    with pytest.raises(BalanceSheetImbalanceError):
        check_balance_sheet(balance_sheet(profit_and_loss="109999.98"))


def test_comparative_balance_sheet_is_checked_too() -> None:
    statements = statement_set(previous_sheet=balance_sheet(profit_and_loss="100000"))

    with pytest.raises(BalanceSheetImbalanceError) as exc_info:
        check_statement_set(statements)

    assert exc_info.value.period == "previous"
    assert exc_info.value.discrepancy == Decimal("10000")


def test_balance_errors_collects_messages_for_every_period() -> None:
    statements = statement_set(
        sheet=balance_sheet(profit_and_loss="109000"),
        previous_sheet=balance_sheet(profit_and_loss="111000"),
    )

    errors = balance_errors(statements)

    assert len(errors) == 2
    assert "(current)" in errors[0] and "discrepancy 1,000" in errors[0]
    assert "(previous)" in errors[1] and "discrepancy -1,000" in errors[1]


def test_cash_flow_reconciliation() -> None:
    reconciled = CashFlowData(
        profit_before_tax=Decimal("1000"),
        opening_cash=Decimal("500"),
        closing_cash=Decimal("1300"),
        tax_paid=Decimal("200"),
    )
    assert reconciled.net_change_in_cash == Decimal("800")
    assert cash_flow_errors(reconciled) == []

    broken = CashFlowData(
        profit_before_tax=Decimal("1000"),
        opening_cash=Decimal("500"),
        closing_cash=Decimal("1400"),
        tax_paid=Decimal("200"),
    )
    (message,) = cash_flow_errors(broken, period="previous")
    assert "Cash flow (previous) does not reconcile" in message


def test_amounts_are_coerced_to_decimal() -> None:
    sheet = balance_sheet(cash=50000, profit_and_loss="110000")
    assert isinstance(sheet.cash, Decimal)

    with pytest.raises(FilingValidationError):
        balance_sheet(cash="fifty")
