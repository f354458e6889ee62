# src/statutory_filings/adapters/ixbrl/layout.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""XHTML layout helpers shared by the statement encoders.

Purpose:
    Build headings, paragraphs and two-column statement tables in the XHTML
    namespace, delegating every numeric cell to ``InlineTagger``.

Layer:
    adapters/ixbrl
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from lxml import etree

from statutory_filings.adapters.ixbrl.tagging import InlineTagger, format_amount
from statutory_filings.adapters.ixbrl.taxonomy import (
    BALANCE_SHEET,
    BALANCE_SHEET_PREVIOUS,
    CURRENT,
    PREVIOUS,
    xhtml,
)
from statutory_filings.domain.entities.filing_context import FilingContext


def element(
    parent: etree._Element,
    tag: str,
    text: str | None = None,
    *,
    cls: str | None = None,
    **attrs: str,
) -> etree._Element:
    """Append an XHTML element to ``parent`` and return it."""
    el = etree.SubElement(parent, xhtml(tag))
    if cls:
        el.set("class", cls)
    for key, value in attrs.items():
        el.set(key.replace("_", "-"), value)
    if text is not None:
        el.text = text
    return el


def section(parent: etree._Element, title: str, *, cls: str) -> etree._Element:
    """Append a titled ``div`` section."""
    div = element(parent, "div", cls=cls)
    element(div, "h2", title)
    return div


def tagged_paragraph(parent: etree._Element, fact: etree._Element, *, prefix: str = "") -> etree._Element:
    """Append a paragraph containing ``fact`` after optional plain text."""
    p = element(parent, "p", prefix or None)
    p.append(fact)
    return p


def plain_amount(value: Decimal) -> str:
    """Render an untagged amount with the same presentation as a tagged one."""
    text = format_amount(value)
    return f"({text})" if value < 0 else text


class StatementTable:
    """A statement table with a current column and an optional comparative.

    Args:
        parent: Element the table is appended to.
        tagger: Tagger bound to the document's contexts and units.
        unit: Unit id for monetary cells.
        current_context: Context of the current column.
        previous_context: Context of the comparative column, or ``None``.
        headings: Column headings (current, previous).
    """

    def __init__(
        self,
        parent: etree._Element,
        tagger: InlineTagger,
        *,
        unit: str,
        current_context: str,
        previous_context: str | None,
        headings: tuple[str, str | None],
    ) -> None:
        self._tagger = tagger
        self._unit = unit
        self._current_context = current_context
        self._previous_context = previous_context
        self._table = element(parent, "table", cls="statement")
        head = element(element(self._table, "thead"), "tr")
        element(head, "th", "Note")
        element(head, "th")
        element(head, "th", headings[0], cls="number")
        if self.has_previous:
            element(head, "th", headings[1] or "", cls="number")
        self._body = element(self._table, "tbody")

    @property
    def has_previous(self) -> bool:
        return self._previous_context is not None

    @property
    def columns(self) -> int:
        return 4 if self.has_previous else 3

    def heading(self, label: str) -> None:
        row = element(self._body, "tr", cls="heading")
        cell = element(row, "td", colspan=str(self.columns))
        element(cell, "strong", label)

    def money_row(
        self,
        label: str,
        concept: str,
        current: Decimal,
        previous: Decimal | None = None,
        *,
        total: bool = False,
        note: str | None = None,
        always: bool = False,
    ) -> bool:
        """Append a tagged row; nil rows are skipped unless ``always`` is set.

        Returns:
            True when the row was written.
        """
        if not always and not current and not previous:
            return False
        row = element(self._body, "tr", cls="total" if total else None)
        element(row, "td", note or "")
        label_cell = element(row, "td")
        if total:
            element(label_cell, "strong", label)
        else:
            label_cell.text = label

        self._money_cell(row, current, concept, self._current_context)
        if self._previous_context is not None:
            if previous is None:
                element(row, "td", "-", cls="number")
            else:
                self._money_cell(row, previous, concept, self._previous_context)
        return True

    def text_row(self, label: str, current: str, previous: str | None = None) -> None:
        """Append an untagged row."""
        row = element(self._body, "tr")
        element(row, "td")
        element(row, "td", label)
        element(row, "td", current, cls="number")
        if self.has_previous:
            element(row, "td", previous if previous is not None else "-", cls="number")

    def _money_cell(
        self,
        row: etree._Element,
        value: Decimal,
        concept: str,
        context_ref: str,
    ) -> None:
        cell = element(row, "td", cls="number")
        self._tagger.append_amount(cell, value, concept, context_ref, self._unit)


@dataclass(frozen=True)
class StatementScope:
    """Per-document rendering state handed to every statement encoder."""

    context: FilingContext
    tagger: InlineTagger

    @property
    def unit(self) -> str:
        return self.context.currency

    def headings(self) -> tuple[str, str]:
        currency = self.context.currency
        return (
            f"{self.context.period_end.year} ({currency})",
            f"{self.context.comparative_period.end.year} ({currency})",
        )

    def table(
        self,
        parent: etree._Element,
        *,
        instant: bool,
        has_previous: bool,
    ) -> StatementTable:
        """Return a table over the duration or instant contexts."""
        current, previous = (BALANCE_SHEET, BALANCE_SHEET_PREVIOUS) if instant else (CURRENT, PREVIOUS)
        return StatementTable(
            parent,
            self.tagger,
            unit=self.unit,
            current_context=current,
            previous_context=previous if has_previous else None,
            headings=self.headings(),
        )


__all__ = ["StatementScope", "StatementTable", "element", "plain_amount", "section", "tagged_paragraph"]
