# src/statutory_filings/adapters/ixbrl/strategic_report.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Strategic report encoder (large companies, s414A Companies Act 2006)."""

from __future__ import annotations

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, element, section, tagged_paragraph
from statutory_filings.adapters.ixbrl.taxonomy import CURRENT, direp
from statutory_filings.domain.entities.financial_statements import StrategicReportData

_NARRATIVE: tuple[tuple[str, str, str], ...] = (
    ("Business model", "DescriptionBusinessModel", "business_model"),
    ("Strategy and objectives", "DescriptionStrategyObjectives", "strategy_and_objectives"),
    ("Review of the business", "DescriptionBusinessReview", "business_review"),
    ("Financial performance", "AnalysisFinancialPerformance", "financial_performance"),
)

_NON_FINANCIAL: tuple[tuple[str, str, str], ...] = (
    ("Environmental matters", "DescriptionEnvironmentalMatters", "environmental_matters"),
    ("Employees", "DescriptionEmployeesInformationStatement", "employees"),
    ("Social matters", "DescriptionSocialMatters", "social_matters"),
    ("Respect for human rights", "DescriptionHumanRights", "human_rights"),
    ("Anti-corruption and anti-bribery", "DescriptionAntiCorruptionAntiBriberyMatters", "anti_corruption"),
)


def encode_strategic_report(
    parent: etree._Element,
    scope: StatementScope,
    report: StrategicReportData,
) -> etree._Element:
    """Append the strategic report to ``parent`` and return it."""
    tagger = scope.tagger
    div = section(parent, "Strategic Report", cls="strategic-report")

    def narrative(rows: tuple[tuple[str, str, str], ...]) -> None:
        for heading, concept, attr in rows:
            text = getattr(report, attr)
            if not text:
                continue
            element(div, "h3", heading)
            tagged_paragraph(div, tagger.tag_text(text, direp(concept), CURRENT))

    narrative(_NARRATIVE)

    if report.key_performance_indicators:
        element(div, "h3", "Key performance indicators")
        table = element(div, "table", cls="kpi")
        head = element(element(table, "thead"), "tr")
        for title in ("Indicator", "Value", "Analysis"):
            element(head, "th", title)
        body = element(table, "tbody")
        for kpi in report.key_performance_indicators:
            row = element(body, "tr")
            element(row, "td", kpi.name)
            element(row, "td", kpi.value, cls="number")
            element(row, "td", kpi.analysis)

    if report.principal_risks:
        element(div, "h3", "Principal risks and uncertainties")
        items = element(div, "ul", cls="risks")
        for risk in report.principal_risks:
            item = element(items, "li")
            element(item, "strong", risk.risk)
            if risk.impact:
                element(item, "p", f"Impact: {risk.impact}")
            if risk.mitigation:
                element(item, "p", f"Mitigation: {risk.mitigation}")

    if any(getattr(report, attr) for _, _, attr in _NON_FINANCIAL):
        element(div, "h3", "Non-financial and sustainability information")
        narrative(_NON_FINANCIAL)

    if report.future_developments:
        element(div, "h3", "Future developments")
        tagged_paragraph(
            div,
            tagger.tag_text(report.future_developments, direp("DescriptionFutureDevelopmentsStrategicReport"), CURRENT),
        )

    if report.approval_date is not None:
        p = tagged_paragraph(
            div,
            tagger.tag_date(report.approval_date, direp("DateApprovalStrategicReport"), CURRENT),
            prefix="This report was approved by the board on ",
        )
        if report.approved_by:
            p[-1].tail = " and signed on its behalf by "
            signer = tagger.tag_text(report.approved_by, direp("NameDirectorSigningStrategicReport"), CURRENT)
            p.append(signer)
            signer.tail = f", {report.director_position}."
        else:
            p[-1].tail = "."
    return div
