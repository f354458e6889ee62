# src/statutory_filings/adapters/ixbrl/document.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Tagged-document generator.

Purpose:
    Render a ``FinancialStatementSet`` as one Inline XBRL (XHTML) document:
    an ``ix:header`` declaring the schema reference, contexts and units,
    followed by the statements the entity size requires.

Layer:
    adapters/ixbrl

Notes:
    - The balance sheet identity is enforced before anything is tagged.
    - Comparative contexts are declared only when comparative data exists.
    - Composition is decided per ``EntitySize``:
        * strategic report for large companies only,
        * cash flow statement for medium and large companies,
        * profit and loss depth from ``profit_loss_format_for``.
    - Output is deterministic for identical inputs.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Final

from lxml import etree

from statutory_filings.adapters.govtalk.envelope import secure_parser
from statutory_filings.adapters.ixbrl.balance_sheet import encode_balance_sheet
from statutory_filings.adapters.ixbrl.cash_flow import encode_cash_flow
from statutory_filings.adapters.ixbrl.directors_report import encode_directors_report
from statutory_filings.adapters.ixbrl.layout import StatementScope, element
from statutory_filings.adapters.ixbrl.notes import encode_notes
from statutory_filings.adapters.ixbrl.packaging import document_filename
from statutory_filings.adapters.ixbrl.profit_loss import encode_profit_loss
from statutory_filings.adapters.ixbrl.strategic_report import encode_strategic_report
from statutory_filings.adapters.ixbrl.tagging import InlineTagger, format_long_date
from statutory_filings.adapters.ixbrl.taxonomy import (
    BALANCE_SHEET,
    BALANCE_SHEET_PREVIOUS,
    CURRENT,
    ENTITY_SCHEME,
    LINK_NS,
    NSMAP,
    PREVIOUS,
    PURE_UNIT,
    XLINK_NS,
    bus,
    declared_contexts,
    ix,
    schema_ref_for,
    xbrli,
    xhtml,
)
from statutory_filings.domain.entities.filing_context import FilingContext
from statutory_filings.domain.entities.financial_statements import FinancialStatementSet
from statutory_filings.domain.entities.tagged_document import TaggedDocument
from statutory_filings.domain.exceptions.filing import FilingValidationError
from statutory_filings.domain.services.balance_validation import check_statement_set
from statutory_filings.domain.services.entity_size import (
    profit_loss_format_for,
    requires_cash_flow,
    requires_strategic_report,
)

logger = logging.getLogger(__name__)

_STYLE: Final[str] = (
    "body{font-family:Arial,sans-serif;margin:2em;}"
    "table.statement{border-collapse:collapse;width:100%;margin-bottom:1.5em;}"
    "td,th{padding:0.25em 0.5em;}"
    "td.number,th.number{text-align:right;}"
    "tr.total td{border-top:1px solid #000;}"
)


class TaggedDocumentGenerator:
    """Render financial statements as an iXBRL document.

    Args:
        pretty_print: Indent the serialized XHTML.
    """

    def __init__(self, *, pretty_print: bool = True) -> None:
        self._pretty_print = pretty_print

    def generate(self, context: FilingContext, statements: FinancialStatementSet) -> TaggedDocument:
        """Return the tagged document for ``statements``.

        Raises:
            FilingValidationError: Invalid context, or a statement required
                for the entity size is missing.
            BalanceSheetImbalanceError: Net assets differ from total equity.
            TaggingError: A fact references an undeclared context or unit.
        """
        errors = context.validate()
        if errors:
            raise FilingValidationError("Filing context is invalid", errors=errors)
        check_statement_set(statements)

        size = context.entity_size
        if requires_strategic_report(size) and statements.strategic_report is None:
            raise FilingValidationError(
                "A strategic report is required for large companies",
                details={"entity_size": size.value},
            )
        if requires_cash_flow(size) and statements.cash_flow is None:
            raise FilingValidationError(
                "A cash flow statement is required for medium and large companies",
                details={"entity_size": size.value},
            )

        comparatives = statements.has_comparatives
        tagger = InlineTagger(
            contexts=declared_contexts(comparatives=comparatives),
            units=(context.currency, PURE_UNIT),
        )
        scope = StatementScope(context=context, tagger=tagger)

        html = etree.Element(xhtml("html"), nsmap=NSMAP)
        head = etree.SubElement(html, xhtml("head"))
        element(head, "meta", http_equiv="Content-Type", content="text/html; charset=UTF-8")
        element(head, "title", f"{context.company_name} - Annual Accounts {context.period_end.year}")
        element(head, "style", _STYLE, type="text/css")

        body = etree.SubElement(html, xhtml("body"))
        self._header(body, context, tagger, comparatives=comparatives)
        self._statements(body, scope, statements)

        content = etree.tostring(
            html,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=self._pretty_print,
        )
        logger.info(
            "filings.ixbrl.generate.success",
            extra={
                "company_number": context.company_number,
                "entity_size": size.value,
                "comparatives": comparatives,
                "bytes": len(content),
            },
        )
        return TaggedDocument(filename=document_filename(context), content=content)

    # ------------------------------------------------------------------ #
    # Header
    # ------------------------------------------------------------------ #

    def _header(
        self,
        body: etree._Element,
        context: FilingContext,
        tagger: InlineTagger,
        *,
        comparatives: bool,
    ) -> None:
        wrapper = element(body, "div", style="display:none")
        header = etree.SubElement(wrapper, ix("header"))

        hidden = etree.SubElement(header, ix("hidden"))
        hidden.append(tagger.tag_text(context.company_name, bus("EntityCurrentLegalOrRegisteredName"), CURRENT))
        hidden.append(tagger.tag_text(context.company_number, bus("UKCompaniesHouseRegisteredNumber"), CURRENT))
        hidden.append(tagger.tag_date(context.period_start, bus("StartDateForPeriodCoveredByReport"), CURRENT))
        hidden.append(tagger.tag_date(context.period_end, bus("EndDateForPeriodCoveredByReport"), CURRENT))
        hidden.append(tagger.tag_date(context.balance_sheet_date, bus("BalanceSheetDate"), CURRENT))
        hidden.append(tagger.tag_text(context.accounting_framework, bus("AccountingStandardsApplied"), CURRENT))

        references = etree.SubElement(header, ix("references"))
        schema_ref = etree.SubElement(references, f"{{{LINK_NS}}}schemaRef")
        schema_ref.set(f"{{{XLINK_NS}}}type", "simple")
        schema_ref.set(f"{{{XLINK_NS}}}href", schema_ref_for(context.entity_size))

        resources = etree.SubElement(header, ix("resources"))
        current = context.current_period
        self._duration_context(resources, CURRENT, context, current.start, current.end)
        self._instant_context(resources, BALANCE_SHEET, context, context.balance_sheet_date)
        if comparatives:
            previous = context.comparative_period
            self._duration_context(resources, PREVIOUS, context, previous.start, previous.end)
            self._instant_context(resources, BALANCE_SHEET_PREVIOUS, context, context.comparative_balance_sheet_date)

        self._unit(resources, context.currency, f"iso4217:{context.currency}")
        self._unit(resources, PURE_UNIT, "xbrli:pure")

    @staticmethod
    def _context(resources: etree._Element, context_id: str, context: FilingContext) -> etree._Element:
        ctx = etree.SubElement(resources, xbrli("context"))
        ctx.set("id", context_id)
        entity = etree.SubElement(ctx, xbrli("entity"))
        identifier = etree.SubElement(entity, xbrli("identifier"))
        identifier.set("scheme", ENTITY_SCHEME)
        identifier.text = context.company_number
        return etree.SubElement(ctx, xbrli("period"))

    def _duration_context(
        self,
        resources: etree._Element,
        context_id: str,
        context: FilingContext,
        start: date,
        end: date,
    ) -> None:
        period = self._context(resources, context_id, context)
        etree.SubElement(period, xbrli("startDate")).text = start.isoformat()
        etree.SubElement(period, xbrli("endDate")).text = end.isoformat()

    def _instant_context(
        self,
        resources: etree._Element,
        context_id: str,
        context: FilingContext,
        instant: date,
    ) -> None:
        period = self._context(resources, context_id, context)
        etree.SubElement(period, xbrli("instant")).text = instant.isoformat()

    @staticmethod
    def _unit(resources: etree._Element, unit_id: str, measure: str) -> None:
        unit = etree.SubElement(resources, xbrli("unit"))
        unit.set("id", unit_id)
        etree.SubElement(unit, xbrli("measure")).text = measure

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #

    def _statements(
        self,
        body: etree._Element,
        scope: StatementScope,
        statements: FinancialStatementSet,
    ) -> None:
        context = scope.context
        container = element(body, "div", cls="annual-accounts")
        cover = element(container, "div", cls="cover")
        element(cover, "h1", context.company_name)
        element(cover, "p", f"Registered number: {context.company_number}")
        element(cover, "p", "Annual Report and Financial Statements")
        element(cover, "p", f"For the year ended {format_long_date(context.period_end)}")

        size = context.entity_size
        if requires_strategic_report(size) and statements.strategic_report is not None:
            encode_strategic_report(container, scope, statements.strategic_report)
        encode_directors_report(container, scope, statements.directors_report)
        encode_profit_loss(container, scope, statements.profit_loss, profit_loss_format_for(size))
        encode_balance_sheet(container, scope, statements.balance_sheet, statements.directors_report)
        if requires_cash_flow(size) and statements.cash_flow is not None:
            encode_cash_flow(container, scope, statements.cash_flow)
        encode_notes(container, scope, statements.notes)


def strip_tags(document: TaggedDocument | bytes) -> str:
    """Return a human-readable XHTML preview with all iXBRL markup removed.

    The hidden header is dropped and every ``ix:`` fact is unwrapped, keeping
    its displayed text.
    """
    content = document.content if isinstance(document, TaggedDocument) else document
    root = etree.fromstring(content, secure_parser())
    for header in root.iter(ix("header")):
        wrapper = header.getparent()
        if wrapper is not None and wrapper.get("style") == "display:none":
            header = wrapper
        parent = header.getparent()
        if parent is not None:
            parent.remove(header)
        break
    etree.strip_tags(root, ix("nonFraction"), ix("nonNumeric"))
    etree.cleanup_namespaces(root, top_nsmap={None: NSMAP[None]})
    return etree.tostring(root, encoding="unicode")


__all__ = ["TaggedDocumentGenerator", "strip_tags"]
