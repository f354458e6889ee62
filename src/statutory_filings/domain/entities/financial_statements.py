# src/statutory_filings/domain/entities/financial_statements.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Financial statement entities.

Purpose:
    Typed line items for one accounting period (and optionally its
    comparative period): balance sheet, profit and loss account, cash flow
    statement, strategic report, directors' report and notes.

Layer:
    domain

Notes:
    - Totals (net current assets, net assets, total equity, gross profit,
      operating profit, ...) are properties computed from the line items.
      They are never accepted as inputs, so a presented total and its tagged
      value cannot diverge.
    - Amounts are positive magnitudes as they appear on the face of the
      statements; presentation decides which are shown as deductions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Generic, TypeVar

from statutory_filings.domain.value_objects.money import ZERO, coerce_decimal_fields

T = TypeVar("T")


@dataclass(frozen=True)
class Comparative(Generic[T]):
    """A current-period value paired with an optional comparative value."""

    current: T
    previous: T | None = None

    @property
    def has_previous(self) -> bool:
        """Return True when comparative figures are present."""
        return self.previous is not None


@dataclass(frozen=True)
class BalanceSheetData:
    """Balance sheet line items at a single instant."""

    called_up_share_capital: Decimal
    profit_and_loss_account: Decimal
    intangible_assets: Decimal = ZERO
    tangible_assets: Decimal = ZERO
    investments: Decimal = ZERO
    stocks: Decimal = ZERO
    debtors: Decimal = ZERO
    cash: Decimal = ZERO
    creditors_due_within_one_year: Decimal = ZERO
    creditors_due_after_one_year: Decimal = ZERO
    provisions: Decimal = ZERO
    share_premium: Decimal = ZERO
    revaluation_reserve: Decimal = ZERO
    other_reserves: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def fixed_assets(self) -> Decimal:
        return self.intangible_assets + self.tangible_assets + self.investments

    @property
    def current_assets(self) -> Decimal:
        return self.stocks + self.debtors + self.cash

    @property
    def total_assets(self) -> Decimal:
        return self.fixed_assets + self.current_assets

    @property
    def net_current_assets(self) -> Decimal:
        return self.current_assets - self.creditors_due_within_one_year

    @property
    def total_assets_less_current_liabilities(self) -> Decimal:
        return self.fixed_assets + self.net_current_assets

    @property
    def total_liabilities(self) -> Decimal:
        return (
            self.creditors_due_within_one_year
            + self.creditors_due_after_one_year
            + self.provisions
        )

    @property
    def net_assets(self) -> Decimal:
        return self.total_assets - self.total_liabilities

    @property
    def total_equity(self) -> Decimal:
        return (
            self.called_up_share_capital
            + self.share_premium
            + self.revaluation_reserve
            + self.other_reserves
            + self.profit_and_loss_account
        )

    @property
    def discrepancy(self) -> Decimal:
        """Signed difference ``net_assets - total_equity``."""
        return self.net_assets - self.total_equity


@dataclass(frozen=True)
class ProfitLossData:
    """Profit and loss account line items for one period."""

    turnover: Decimal
    cost_of_sales: Decimal = ZERO
    other_operating_income: Decimal = ZERO
    administrative_expenses: Decimal = ZERO
    distribution_costs: Decimal = ZERO
    other_operating_charges: Decimal = ZERO
    interest_receivable: Decimal = ZERO
    interest_payable: Decimal = ZERO
    tax_on_profit: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def gross_profit(self) -> Decimal:
        return self.turnover - self.cost_of_sales

    @property
    def operating_expenses(self) -> Decimal:
        return self.administrative_expenses + self.distribution_costs + self.other_operating_charges

    @property
    def operating_profit(self) -> Decimal:
        return self.gross_profit - self.operating_expenses + self.other_operating_income

    @property
    def profit_before_tax(self) -> Decimal:
        return self.operating_profit + self.interest_receivable - self.interest_payable

    @property
    def profit_for_financial_year(self) -> Decimal:
        return self.profit_before_tax - self.tax_on_profit


@dataclass(frozen=True)
class CashFlowData:
    """Cash flow statement (indirect method) for one period.

    Working-capital movements are signed increases: a positive
    ``increase_in_stocks`` reduces operating cash, a positive
    ``increase_in_creditors`` adds to it.
    """

    profit_before_tax: Decimal
    opening_cash: Decimal
    closing_cash: Decimal
    depreciation: Decimal = ZERO
    amortisation: Decimal = ZERO
    interest_payable: Decimal = ZERO
    interest_receivable: Decimal = ZERO
    gain_on_disposal: Decimal = ZERO
    increase_in_stocks: Decimal = ZERO
    increase_in_debtors: Decimal = ZERO
    increase_in_creditors: Decimal = ZERO
    interest_paid: Decimal = ZERO
    tax_paid: Decimal = ZERO
    purchase_of_tangible_assets: Decimal = ZERO
    purchase_of_intangible_assets: Decimal = ZERO
    purchase_of_investments: Decimal = ZERO
    proceeds_from_disposals: Decimal = ZERO
    proceeds_from_share_issue: Decimal = ZERO
    new_loans: Decimal = ZERO
    repayment_of_borrowings: Decimal = ZERO
    dividends_paid: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def cash_generated_from_operations(self) -> Decimal:
        return (
            self.profit_before_tax
            + self.depreciation
            + self.amortisation
            + self.interest_payable
            - self.interest_receivable
            - self.gain_on_disposal
            - self.increase_in_stocks
            - self.increase_in_debtors
            + self.increase_in_creditors
        )

    @property
    def net_cash_from_operating(self) -> Decimal:
        return self.cash_generated_from_operations - self.interest_paid - self.tax_paid

    @property
    def net_cash_from_investing(self) -> Decimal:
        return (
            self.proceeds_from_disposals
            - self.purchase_of_tangible_assets
            - self.purchase_of_intangible_assets
            - self.purchase_of_investments
        )

    @property
    def net_cash_from_financing(self) -> Decimal:
        return (
            self.proceeds_from_share_issue
            + self.new_loans
            - self.repayment_of_borrowings
            - self.dividends_paid
        )

    @property
    def net_change_in_cash(self) -> Decimal:
        return self.net_cash_from_operating + self.net_cash_from_investing + self.net_cash_from_financing

    @property
    def reconciliation_difference(self) -> Decimal:
        """Signed difference between reported closing cash and the derived one."""
        return self.closing_cash - (self.opening_cash + self.net_change_in_cash)


@dataclass(frozen=True)
class KeyPerformanceIndicator:
    name: str
    value: str
    analysis: str = ""


@dataclass(frozen=True)
class PrincipalRisk:
    risk: str
    impact: str = ""
    mitigation: str = ""


@dataclass(frozen=True)
class StrategicReportData:
    """Narrative strategic report (large companies)."""

    business_model: str | None = None
    strategy_and_objectives: str | None = None
    business_review: str | None = None
    financial_performance: str | None = None
    key_performance_indicators: Sequence[KeyPerformanceIndicator] = ()
    principal_risks: Sequence[PrincipalRisk] = ()
    environmental_matters: str | None = None
    employees: str | None = None
    social_matters: str | None = None
    human_rights: str | None = None
    anti_corruption: str | None = None
    future_developments: str | None = None
    approval_date: date | None = None
    approved_by: str | None = None
    director_position: str = "Director"


@dataclass(frozen=True)
class Director:
    name: str
    appointment_date: date | None = None
    resignation_date: date | None = None


@dataclass(frozen=True)
class DirectorsReportData:
    """Directors' report and approval metadata."""

    directors: Sequence[Director]
    principal_activities: str
    approval_date: date | None
    signing_director: str
    signing_position: str = "Director"
    business_review: str | None = None
    future_developments: str | None = None
    dividends_paid: Decimal | None = None
    dividends_proposed: Decimal | None = None
    audit_exempt: bool = True
    small_company_regime: bool = True

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class AccountingPolicies:
    """Note 1: accounting policies."""

    accounting_framework: str
    turnover_policy: str
    taxation_policy: str
    going_concern: bool = True
    going_concern_uncertainties: str | None = None
    depreciation_policy: str | None = None
    stocks_policy: str | None = None
    pension_policy: str | None = None
    foreign_currency_policy: str | None = None
    leases_policy: str | None = None


@dataclass(frozen=True)
class DebtorsNote:
    trade_debtors: Decimal
    other_debtors: Decimal = ZERO
    prepayments: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def total(self) -> Decimal:
        return self.trade_debtors + self.other_debtors + self.prepayments


@dataclass(frozen=True)
class CreditorsNote:
    trade_creditors: Decimal
    taxation_and_social_security: Decimal = ZERO
    other_creditors: Decimal = ZERO
    accruals: Decimal = ZERO

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def total(self) -> Decimal:
        return (
            self.trade_creditors
            + self.taxation_and_social_security
            + self.other_creditors
            + self.accruals
        )


@dataclass(frozen=True)
class ShareCapitalNote:
    number_of_shares: int
    nominal_value: Decimal
    share_class: str = "Ordinary"

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)

    @property
    def total_nominal(self) -> Decimal:
        return self.nominal_value * self.number_of_shares


@dataclass(frozen=True)
class RelatedPartyTransaction:
    party: str
    nature: str
    amount: Decimal

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class NotesToAccounts:
    """Notes to the financial statements."""

    accounting_policies: AccountingPolicies
    average_employees: int | None = None
    directors_remuneration: Decimal | None = None
    debtors: DebtorsNote | None = None
    creditors: CreditorsNote | None = None
    share_capital: ShareCapitalNote | None = None
    related_party_transactions: Sequence[RelatedPartyTransaction] = ()
    post_balance_sheet_events: str | None = None

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class FinancialStatementSet:
    """All statements for one accounting period, with optional comparatives."""

    balance_sheet: Comparative[BalanceSheetData]
    profit_loss: Comparative[ProfitLossData]
    directors_report: DirectorsReportData
    notes: NotesToAccounts
    cash_flow: Comparative[CashFlowData] | None = None
    strategic_report: StrategicReportData | None = None

    @property
    def has_comparatives(self) -> bool:
        """Return True when any statement carries comparative figures."""
        return (
            self.balance_sheet.has_previous
            or self.profit_loss.has_previous
            or (self.cash_flow is not None and self.cash_flow.has_previous)
        )
