# src/statutory_filings/adapters/ixbrl/notes.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Notes to the financial statements encoder.

Notes are numbered in the order they are written; optional notes without
data are omitted and do not consume a number. Note analyses are tagged for
the current period only.
"""

from __future__ import annotations

from itertools import count

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, element, plain_amount, section, tagged_paragraph
from statutory_filings.adapters.ixbrl.taxonomy import CURRENT, PURE_UNIT, core
from statutory_filings.domain.entities.financial_statements import AccountingPolicies, NotesToAccounts

_OPTIONAL_POLICIES: tuple[tuple[str, str, str], ...] = (
    ("Tangible fixed assets and depreciation", "DescriptionDepreciationMethodRateOrUsefulEconomicLifeForPropertyPlantEquipment", "depreciation_policy"),
    ("Stocks", "InventoriesPolicy", "stocks_policy"),
    ("Pensions", "DefinedContributionPensionsPolicy", "pension_policy"),
    ("Foreign currencies", "ForeignCurrencyTranslationAndOperationsPolicy", "foreign_currency_policy"),
    ("Leases", "LeasesPolicy", "leases_policy"),
)


def encode_notes(
    parent: etree._Element,
    scope: StatementScope,
    notes: NotesToAccounts,
) -> etree._Element:
    """Append the notes section to ``parent`` and return it."""
    tagger = scope.tagger
    div = section(parent, "Notes to the Financial Statements", cls="notes")
    number = count(1)

    def note(title: str) -> etree._Element:
        block = element(div, "div", cls="note")
        element(block, "h3", f"{next(number)}. {title}")
        return block

    _accounting_policies(note("Accounting policies"), scope, notes.accounting_policies)

    if notes.average_employees is not None:
        block = note("Employees")
        p = element(block, "p", "The average number of persons employed by the company during the year was ")
        tagger.append_amount(p, notes.average_employees, core("AverageNumberEmployeesDuringPeriod"), CURRENT, PURE_UNIT)
        p[-1].tail = "."

    if notes.directors_remuneration is not None:
        block = note("Directors' remuneration")
        table = scope.table(block, instant=False, has_previous=False)
        table.money_row(
            "Directors' remuneration",
            core("DirectorRemuneration"),
            notes.directors_remuneration,
            always=True,
        )

    if notes.debtors is not None:
        block = note("Debtors")
        table = scope.table(block, instant=True, has_previous=False)
        table.money_row("Trade debtors", core("TradeDebtorsTradeReceivables"), notes.debtors.trade_debtors, always=True)
        table.money_row("Other debtors", core("OtherDebtors"), notes.debtors.other_debtors)
        table.money_row("Prepayments and accrued income", core("PrepaymentsAccruedIncome"), notes.debtors.prepayments)
        table.text_row("Total debtors", plain_amount(notes.debtors.total))

    if notes.creditors is not None:
        block = note("Creditors: amounts falling due within one year")
        table = scope.table(block, instant=True, has_previous=False)
        cred = notes.creditors
        table.money_row("Trade creditors", core("TradeCreditorsTradePayables"), cred.trade_creditors, always=True)
        table.money_row("Taxation and social security", core("TaxationSocialSecurityPayable"), cred.taxation_and_social_security)
        table.money_row("Other creditors", core("OtherCreditors"), cred.other_creditors)
        table.money_row("Accruals and deferred income", core("AccrualsDeferredIncome"), cred.accruals)
        table.text_row("Total creditors", plain_amount(cred.total))

    if notes.share_capital is not None:
        block = note("Called up share capital")
        share = notes.share_capital
        p = element(block, "p", "Allotted, called up and fully paid: ")
        tagger.append_amount(p, share.number_of_shares, core("NumberSharesIssuedFullyPaid"), CURRENT, PURE_UNIT)
        p[-1].tail = (
            f" {share.share_class} shares of {plain_amount(share.nominal_value)} each, "
            f"total nominal value {plain_amount(share.total_nominal)} {scope.unit}."
        )

    if notes.related_party_transactions:
        block = note("Related party transactions")
        items = element(block, "ul", cls="related-parties")
        for txn in notes.related_party_transactions:
            element(items, "li", f"{txn.party}: {txn.nature} ({plain_amount(txn.amount)} {scope.unit})")

    if notes.post_balance_sheet_events:
        block = note("Events after the reporting period")
        tagged_paragraph(
            block,
            tagger.tag_text(
                notes.post_balance_sheet_events,
                core("DescriptionNonadjustingEventAfterReportingPeriod"),
                CURRENT,
            ),
        )
    return div


def _accounting_policies(block: etree._Element, scope: StatementScope, policies: AccountingPolicies) -> None:
    tagger = scope.tagger
    element(block, "h4", "Basis of preparation")
    tagged_paragraph(
        block,
        tagger.tag_text(
            f"These financial statements have been prepared in accordance with {policies.accounting_framework}.",
            core("StatementComplianceWithApplicableReportingFramework"),
            CURRENT,
        ),
    )

    element(block, "h4", "Going concern")
    if policies.going_concern:
        going_concern = (
            "The directors have a reasonable expectation that the company has adequate resources "
            "to continue in operational existence for the foreseeable future and have prepared "
            "the financial statements on the going concern basis."
        )
    else:
        going_concern = "The financial statements have not been prepared on the going concern basis."
    if policies.going_concern_uncertainties:
        going_concern = f"{going_concern} {policies.going_concern_uncertainties}"
    tagged_paragraph(
        block,
        tagger.tag_text(going_concern, core("DescriptionAccountingPolicyGoingConcern"), CURRENT),
    )

    element(block, "h4", "Turnover")
    tagged_paragraph(block, tagger.tag_text(policies.turnover_policy, core("RevenueRecognitionPolicy"), CURRENT))
    element(block, "h4", "Taxation")
    tagged_paragraph(block, tagger.tag_text(policies.taxation_policy, core("IncomeTaxPolicy"), CURRENT))

    for heading, concept, attr in _OPTIONAL_POLICIES:
        text = getattr(policies, attr)
        if not text:
            continue
        element(block, "h4", heading)
        tagged_paragraph(block, tagger.tag_text(text, core(concept), CURRENT))
