# src/statutory_filings/adapters/ixbrl/profit_loss.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Profit and loss account encoder.

Three presentation depths:

* ``ABRIDGED``: turnover, tax and profit for the financial year.
* ``STANDARD``: the full format 1 layout, omitting nil lines.
* ``DETAILED``: the full format 1 layout with every line, nil or not.

Costs are positive magnitudes; only results that are themselves negative
(a gross loss, an operating loss) carry a sign.
"""

from __future__ import annotations

from decimal import Decimal

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, StatementTable, element, section
from statutory_filings.adapters.ixbrl.tagging import format_long_date
from statutory_filings.adapters.ixbrl.taxonomy import core
from statutory_filings.domain.entities.financial_statements import Comparative, ProfitLossData
from statutory_filings.domain.enums.filing import ProfitLossFormat


def encode_profit_loss(
    parent: etree._Element,
    scope: StatementScope,
    data: Comparative[ProfitLossData],
    presentation: ProfitLossFormat,
) -> etree._Element:
    """Append the profit and loss section to ``parent`` and return it."""
    div = section(parent, "Profit and Loss Account", cls="profit-loss")
    element(div, "h3", f"For the year ended {format_long_date(scope.context.period_end)}")
    table = scope.table(div, instant=False, has_previous=data.has_previous)

    match presentation:
        case ProfitLossFormat.ABRIDGED:
            _abridged(table, data)
        case ProfitLossFormat.STANDARD:
            _format_one(table, data, show_nil=False)
        case ProfitLossFormat.DETAILED:
            _format_one(table, data, show_nil=True)
    return div


def _values(data: Comparative[ProfitLossData], attr: str) -> tuple[Decimal, Decimal | None]:
    previous = getattr(data.previous, attr) if data.previous is not None else None
    return getattr(data.current, attr), previous


def _abridged(table: StatementTable, data: Comparative[ProfitLossData]) -> None:
    table.money_row("Turnover", core("Turnover"), *_values(data, "turnover"), note="1", always=True)
    table.money_row(
        "Tax on profit",
        core("TaxTaxCreditOnProfitOrLossOnOrdinaryActivities"),
        *_values(data, "tax_on_profit"),
    )
    table.money_row(
        "Profit (loss) for the financial year",
        core("ProfitLoss"),
        *_values(data, "profit_for_financial_year"),
        total=True,
        always=True,
    )


def _format_one(table: StatementTable, data: Comparative[ProfitLossData], *, show_nil: bool) -> None:
    def row(label: str, concept: str, attr: str, *, total: bool = False, note: str | None = None) -> None:
        table.money_row(
            label,
            core(concept),
            *_values(data, attr),
            total=total,
            note=note,
            always=show_nil or total,
        )

    row("Turnover", "Turnover", "turnover", note="1")
    row("Cost of sales", "CostSales", "cost_of_sales")
    row("Gross profit (loss)", "GrossProfitLoss", "gross_profit", total=True)
    row("Distribution costs", "DistributionCosts", "distribution_costs")
    row("Administrative expenses", "AdministrativeExpenses", "administrative_expenses")
    row("Other operating charges", "OtherOperatingExpensesFormat1", "other_operating_charges")
    row("Other operating income", "OtherOperatingIncomeFormat1", "other_operating_income")
    row("Operating profit (loss)", "OperatingProfitLoss", "operating_profit", total=True)
    row("Interest receivable and similar income", "OtherInterestReceivableSimilarIncomeFinanceIncome", "interest_receivable")
    row("Interest payable and similar charges", "InterestPayableSimilarChargesFinanceCosts", "interest_payable")
    row("Profit (loss) before tax", "ProfitLossOnOrdinaryActivitiesBeforeTax", "profit_before_tax", total=True)
    row("Tax on profit", "TaxTaxCreditOnProfitOrLossOnOrdinaryActivities", "tax_on_profit")
    row("Profit (loss) for the financial year", "ProfitLoss", "profit_for_financial_year", total=True)
