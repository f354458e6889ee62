# src/statutory_filings/adapters/ixbrl/cash_flow.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Cash flow statement encoder (indirect method).

Every line is tagged with its signed effect on cash: outflows and
reconciling deductions are negative and therefore bracketed. Closing cash
is tagged at the balance sheet instant; opening cash is presented untagged
because its instant precedes the declared contexts.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, element, plain_amount, section
from statutory_filings.adapters.ixbrl.tagging import format_long_date
from statutory_filings.adapters.ixbrl.taxonomy import core
from statutory_filings.domain.entities.financial_statements import CashFlowData, Comparative

Effect = Callable[[CashFlowData], Decimal]

_OPERATING: tuple[tuple[str, str, Effect], ...] = (
    ("Profit (loss) before tax", "ProfitLossOnOrdinaryActivitiesBeforeTax", lambda cf: cf.profit_before_tax),
    ("Depreciation", "DepreciationExpensePropertyPlantEquipment", lambda cf: cf.depreciation),
    ("Amortisation", "AmortisationExpenseIntangibleAssets", lambda cf: cf.amortisation),
    ("Finance costs", "AdjustmentsForFinanceCosts", lambda cf: cf.interest_payable),
    ("Finance income", "AdjustmentsForInvestmentIncome", lambda cf: -cf.interest_receivable),
    ("(Gain) loss on disposal of fixed assets", "GainLossOnDisposalsPropertyPlantEquipment", lambda cf: -cf.gain_on_disposal),
    ("(Increase) decrease in stocks", "DecreaseIncreaseInStocks", lambda cf: -cf.increase_in_stocks),
    ("(Increase) decrease in debtors", "DecreaseIncreaseInDebtors", lambda cf: -cf.increase_in_debtors),
    ("Increase (decrease) in creditors", "IncreaseDecreaseInCreditors", lambda cf: cf.increase_in_creditors),
)

_OPERATING_PAYMENTS: tuple[tuple[str, str, Effect], ...] = (
    ("Interest paid", "InterestPaidClassifiedAsOperatingActivities", lambda cf: -cf.interest_paid),
    ("Tax paid", "IncomeTaxesPaidRefundClassifiedAsOperatingActivities", lambda cf: -cf.tax_paid),
)

_INVESTING: tuple[tuple[str, str, Effect], ...] = (
    ("Purchase of tangible fixed assets", "PurchasePropertyPlantEquipment", lambda cf: -cf.purchase_of_tangible_assets),
    ("Purchase of intangible assets", "PurchaseIntangibleAssets", lambda cf: -cf.purchase_of_intangible_assets),
    ("Purchase of investments", "PurchaseFinancialAssets", lambda cf: -cf.purchase_of_investments),
    ("Proceeds from disposals", "ProceedsFromSalesPropertyPlantEquipment", lambda cf: cf.proceeds_from_disposals),
)

_FINANCING: tuple[tuple[str, str, Effect], ...] = (
    ("Proceeds from issue of shares", "ProceedsFromIssuingShares", lambda cf: cf.proceeds_from_share_issue),
    ("New loans", "ProceedsFromBorrowingsClassifiedAsFinancingActivities", lambda cf: cf.new_loans),
    ("Repayment of borrowings", "RepaymentsBorrowingsClassifiedAsFinancingActivities", lambda cf: -cf.repayment_of_borrowings),
    ("Dividends paid", "DividendsPaidClassifiedAsFinancingActivities", lambda cf: -cf.dividends_paid),
)


def encode_cash_flow(
    parent: etree._Element,
    scope: StatementScope,
    data: Comparative[CashFlowData],
) -> etree._Element:
    """Append the cash flow statement to ``parent`` and return it."""
    div = section(parent, "Statement of Cash Flows", cls="cash-flow")
    element(div, "h3", f"For the year ended {format_long_date(scope.context.period_end)}")

    cur, prev = data.current, data.previous
    table = scope.table(div, instant=False, has_previous=data.has_previous)

    def lines(rows: tuple[tuple[str, str, Effect], ...]) -> None:
        for label, concept, effect in rows:
            table.money_row(
                label,
                core(concept),
                effect(cur),
                effect(prev) if prev is not None else None,
            )

    def total(label: str, concept: str, effect: Effect) -> None:
        table.money_row(
            label,
            core(concept),
            effect(cur),
            effect(prev) if prev is not None else None,
            total=True,
            always=True,
        )

    table.heading("Cash flows from operating activities")
    lines(_OPERATING)
    total("Cash generated from operations", "CashGeneratedFromOperations", lambda cf: cf.cash_generated_from_operations)
    lines(_OPERATING_PAYMENTS)
    total("Net cash from operating activities", "NetCashFlowsFromUsedInOperatingActivities", lambda cf: cf.net_cash_from_operating)

    table.heading("Cash flows from investing activities")
    lines(_INVESTING)
    total("Net cash from investing activities", "NetCashFlowsFromUsedInInvestingActivities", lambda cf: cf.net_cash_from_investing)

    table.heading("Cash flows from financing activities")
    lines(_FINANCING)
    total("Net cash from financing activities", "NetCashFlowsFromUsedInFinancingActivities", lambda cf: cf.net_cash_from_financing)

    total(
        "Net increase (decrease) in cash and cash equivalents",
        "IncreaseDecreaseInCashCashEquivalents",
        lambda cf: cf.net_change_in_cash,
    )
    table.text_row(
        "Cash and cash equivalents at beginning of year",
        plain_amount(cur.opening_cash),
        plain_amount(prev.opening_cash) if prev is not None else None,
    )

    closing = scope.table(div, instant=True, has_previous=data.has_previous)
    closing.money_row(
        "Cash and cash equivalents at end of year",
        core("CashCashEquivalents"),
        cur.closing_cash,
        prev.closing_cash if prev is not None else None,
        total=True,
        always=True,
    )
    return div
