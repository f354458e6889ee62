# src/statutory_filings/adapters/ixbrl/directors_report.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Directors' report encoder."""

from __future__ import annotations

from lxml import etree

from statutory_filings.adapters.ixbrl.layout import StatementScope, element, section, tagged_paragraph
from statutory_filings.adapters.ixbrl.tagging import format_long_date
from statutory_filings.adapters.ixbrl.taxonomy import CURRENT, core, direp
from statutory_filings.domain.entities.financial_statements import DirectorsReportData


def encode_directors_report(
    parent: etree._Element,
    scope: StatementScope,
    report: DirectorsReportData,
) -> etree._Element:
    """Append the directors' report to ``parent`` and return it."""
    tagger = scope.tagger
    div = section(parent, "Directors' Report", cls="directors-report")
    element(
        div,
        "p",
        "The directors present their report and the financial statements for the year "
        f"ended {format_long_date(scope.context.period_end)}.",
    )

    element(div, "h3", "Principal activities")
    tagged_paragraph(
        div,
        tagger.tag_text(report.principal_activities, direp("DescriptionPrincipalActivities"), CURRENT),
    )

    element(div, "h3", "Directors")
    element(div, "p", "The directors who held office during the year were as follows:")
    listing = element(div, "ul", cls="directors")
    for director in report.directors:
        text = director.name
        if director.appointment_date is not None:
            text += f" (appointed {format_long_date(director.appointment_date)})"
        if director.resignation_date is not None:
            text += f" (resigned {format_long_date(director.resignation_date)})"
        element(listing, "li", text)

    if report.business_review:
        element(div, "h3", "Business review")
        tagged_paragraph(
            div,
            tagger.tag_text(report.business_review, direp("DescriptionBusinessReviewDirectorsReport"), CURRENT),
        )

    if report.dividends_paid is not None or report.dividends_proposed is not None:
        element(div, "h3", "Dividends")
        if report.dividends_paid is not None:
            p = element(div, "p", "Dividends paid during the year amounted to ")
            tagger.append_amount(p, report.dividends_paid, core("DividendsPaid"), CURRENT, scope.unit)
            p[-1].tail = (p[-1].tail or "") + "."
        if report.dividends_proposed is not None:
            p = element(div, "p", "The directors propose a final dividend of ")
            tagger.append_amount(
                p,
                report.dividends_proposed,
                direp("ProposedDividendShareClassOrdinary"),
                CURRENT,
                scope.unit,
            )
            p[-1].tail = (p[-1].tail or "") + "."

    if report.future_developments:
        element(div, "h3", "Future developments")
        tagged_paragraph(
            div,
            tagger.tag_text(
                report.future_developments,
                direp("DescriptionFutureDevelopmentsDirectorsReport"),
                CURRENT,
            ),
        )

    if report.audit_exempt:
        element(div, "h3", "Audit exemption")
        tagged_paragraph(
            div,
            tagger.tag_text(
                "The company is exempt from the requirement to have its accounts audited "
                "and no members have required an audit under section 476 of the Companies Act 2006.",
                direp("StatementOnQualityExemptionFromAudit"),
                CURRENT,
            ),
        )

    approval = element(div, "div", cls="approval")
    if report.approval_date is not None:
        p = tagged_paragraph(
            approval,
            tagger.tag_date(report.approval_date, direp("DateAuthorisationDirectorsReport"), CURRENT),
            prefix="This report was approved by the board on ",
        )
        p[-1].tail = " and signed on its behalf by:"
    p = tagged_paragraph(
        approval,
        tagger.tag_text(report.signing_director, direp("NameDirectorSigningDirectorsReport"), CURRENT),
    )
    p[-1].tail = f", {report.signing_position}"
    return div
