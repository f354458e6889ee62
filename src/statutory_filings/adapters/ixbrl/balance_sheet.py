# src/statutory_filings/adapters/ixbrl/balance_sheet.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Balance sheet encoder.

Renders the statement of financial position at the balance sheet instant
(and the comparative instant when present), followed by the Companies Act
approval statement.
"""

from __future__ import annotations

from decimal import Decimal

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, element, section, tagged_paragraph
from statutory_filings.adapters.ixbrl.tagging import format_long_date
from statutory_filings.adapters.ixbrl.taxonomy import CURRENT, bus, core
from statutory_filings.domain.entities.financial_statements import (
    BalanceSheetData,
    Comparative,
    DirectorsReportData,
)


def _prev(data: Comparative[BalanceSheetData], attr: str) -> Decimal | None:
    return getattr(data.previous, attr) if data.previous is not None else None


def encode_balance_sheet(
    parent: etree._Element,
    scope: StatementScope,
    data: Comparative[BalanceSheetData],
    directors_report: DirectorsReportData,
) -> etree._Element:
    """Append the balance sheet section to ``parent`` and return it."""
    div = section(parent, "Balance Sheet", cls="balance-sheet")
    element(div, "h3", f"As at {format_long_date(scope.context.balance_sheet_date)}")

    cur = data.current
    table = scope.table(div, instant=True, has_previous=data.has_previous)

    def row(label: str, concept: str, attr: str, **kw: object) -> bool:
        return table.money_row(label, core(concept), getattr(cur, attr), _prev(data, attr), **kw)

    if cur.fixed_assets or (data.previous is not None and data.previous.fixed_assets):
        table.heading("Fixed assets")
        row("Intangible assets", "IntangibleAssets", "intangible_assets")
        row("Tangible assets", "PropertyPlantEquipment", "tangible_assets")
        row("Investments", "FixedAssetInvestments", "investments")
        row("Total fixed assets", "FixedAssets", "fixed_assets", total=True, always=True)

    table.heading("Current assets")
    row("Stocks", "Stocks", "stocks")
    row("Debtors", "Debtors", "debtors")
    row("Cash at bank and in hand", "CashBankInHand", "cash")
    row("Total current assets", "CurrentAssets", "current_assets", total=True, always=True)

    row(
        "Creditors: amounts falling due within one year",
        "CreditorsDueWithinOneYear",
        "creditors_due_within_one_year",
    )
    row(
        "Net current assets (liabilities)",
        "NetCurrentAssetsLiabilities",
        "net_current_assets",
        total=True,
        always=True,
    )
    row(
        "Total assets less current liabilities",
        "TotalAssetsLessCurrentLiabilities",
        "total_assets_less_current_liabilities",
        total=True,
        always=True,
    )
    row(
        "Creditors: amounts falling due after more than one year",
        "CreditorsDueAfterOneYear",
        "creditors_due_after_one_year",
    )
    row("Provisions for liabilities", "ProvisionsForLiabilitiesBalanceSheetSubtotal", "provisions")
    row(
        "Net assets (liabilities)",
        "NetAssetsLiabilitiesIncludingPensionAssetLiability",
        "net_assets",
        total=True,
        always=True,
    )

    table.heading("Capital and reserves")
    row("Called up share capital", "CalledUpShareCapital", "called_up_share_capital", always=True)
    row("Share premium account", "SharePremiumAccount", "share_premium")
    row("Revaluation reserve", "RevaluationReserve", "revaluation_reserve")
    row("Other reserves", "OtherReserves", "other_reserves")
    row("Profit and loss account", "RetainedEarningsAccumulatedLosses", "profit_and_loss_account", always=True)
    row("Total equity", "Equity", "total_equity", total=True, always=True)

    _approval_statement(div, scope, directors_report)
    return div


def _approval_statement(
    parent: etree._Element,
    scope: StatementScope,
    report: DirectorsReportData,
) -> None:
    tagger = scope.tagger
    approval = element(parent, "div", cls="approval")
    if report.audit_exempt:
        tagged_paragraph(
            approval,
            tagger.tag_text(
                "For the year ending "
                f"{format_long_date(scope.context.period_end)} the company was entitled to "
                "exemption from audit under section 477 of the Companies Act 2006 relating "
                "to small companies.",
                bus("StatementThatCompanyEntitledToExemptionFromAuditUnderSection477CompaniesAct2006RelatingToSmallCompanies"),
                CURRENT,
            ),
        )
    if report.small_company_regime:
        tagged_paragraph(
            approval,
            tagger.tag_text(
                "These accounts have been prepared in accordance with the provisions "
                "applicable to companies subject to the small companies regime.",
                bus("StatementThatAccountsHaveBeenPreparedInAccordanceWithProvisionsSmallCompaniesRegime"),
                CURRENT,
            ),
        )
    if report.approval_date is not None:
        p = tagged_paragraph(
            approval,
            tagger.tag_date(
                report.approval_date,
                core("DateAuthorisationFinancialStatementsForIssue"),
                CURRENT,
            ),
            prefix="Approved by the board of directors and authorised for issue on ",
        )
        p[-1].tail = "."
    p = tagged_paragraph(
        approval,
        tagger.tag_text(
            report.signing_director,
            core("NameDirectorSigningFinancialStatements"),
            CURRENT,
        ),
        prefix="Signed on behalf of the board by ",
    )
    p[-1].tail = f", {report.signing_position}"
    element(approval, "p", f"Company registration number: {scope.context.company_number}")
