# src/statutory_filings/adapters/ixbrl/tagging.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Inline XBRL tagging primitives.

Purpose:
    Produce ``ix:nonFraction`` and ``ix:nonNumeric`` elements bound to the
    contexts and units a document has declared.

Layer:
    adapters/ixbrl

Notes:
    - The displayed number is always the absolute value with en-GB grouping;
      a negative value carries ``sign="-"`` and is wrapped in parentheses
      outside the tag. Positive and zero values never carry a sign.
    - A reference to an undeclared context, unit or concept prefix raises
      ``TaggingError``; it indicates a generator bug, not bad input.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from lxml import etree

from statutory_filings.adapters.ixbrl.taxonomy import (
    CONCEPT_PREFIXES,
    DATE_FORMAT,
    NUMBER_FORMAT,
    ix,
)
from statutory_filings.domain.exceptions.filing import TaggingError
from statutory_filings.domain.value_objects.money import to_decimal

_MONTHS: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def round_amount(value: Decimal, decimals: int = 0) -> Decimal:
    """Round half away from zero to ``max(decimals, 0)`` places."""
    quantum = Decimal(1).scaleb(-max(decimals, 0))
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, decimals: int = 0) -> str:
    """Format ``abs(value)`` with en-GB grouping at ``max(decimals, 0)`` places.

    >>> format_amount(Decimal("-1234567.4"))
    '1,234,567'
    """
    magnitude = abs(round_amount(value, decimals))
    return f"{magnitude:,.{max(decimals, 0)}f}"


def format_long_date(value: date) -> str:
    """Render a date as ``31 December 2024``."""
    return f"{value.day} {_MONTHS[value.month - 1]} {value.year}"


class InlineTagger:
    """Create iXBRL fact elements for one document.

    Args:
        contexts: Context ids declared in the document header.
        units: Unit ids declared in the document header.
        prefixes: Concept prefixes declared on the document root.
    """

    def __init__(
        self,
        *,
        contexts: Iterable[str],
        units: Iterable[str],
        prefixes: Iterable[str] = CONCEPT_PREFIXES,
    ) -> None:
        self._contexts = frozenset(contexts)
        self._units = frozenset(units)
        self._prefixes = frozenset(prefixes)

    @property
    def contexts(self) -> frozenset[str]:
        return self._contexts

    def declares(self, context_ref: str) -> bool:
        return context_ref in self._contexts

    def _check(self, concept: str, context_ref: str, unit_ref: str | None = None) -> None:
        prefix, sep, local = concept.partition(":")
        if not sep or not local or prefix not in self._prefixes:
            raise TaggingError(
                "Concept has no declared prefix",
                details={"concept": concept},
            )
        if context_ref not in self._contexts:
            raise TaggingError(
                "Fact references an undeclared context",
                details={"concept": concept, "context": context_ref},
            )
        if unit_ref is not None and unit_ref not in self._units:
            raise TaggingError(
                "Fact references an undeclared unit",
                details={"concept": concept, "unit": unit_ref},
            )

    def tag(
        self,
        value: Decimal | int | str,
        concept: str,
        context_ref: str,
        unit_ref: str,
        decimals: int = 0,
    ) -> etree._Element:
        """Return a detached ``ix:nonFraction`` element for a numeric fact."""
        self._check(concept, context_ref, unit_ref)
        amount = round_amount(to_decimal(value, field_name=concept), decimals)
        el = etree.Element(ix("nonFraction"))
        el.set("name", concept)
        el.set("contextRef", context_ref)
        el.set("unitRef", unit_ref)
        el.set("decimals", str(decimals))
        el.set("scale", "0")
        el.set("format", NUMBER_FORMAT)
        if amount < 0:
            el.set("sign", "-")
        el.text = format_amount(amount, decimals)
        return el

    def tag_text(self, value: str, concept: str, context_ref: str) -> etree._Element:
        """Return a detached ``ix:nonNumeric`` element for a text fact."""
        self._check(concept, context_ref)
        el = etree.Element(ix("nonNumeric"))
        el.set("name", concept)
        el.set("contextRef", context_ref)
        el.text = value
        return el

    def tag_date(self, value: date, concept: str, context_ref: str) -> etree._Element:
        """Return a detached ``ix:nonNumeric`` element for a date fact."""
        el = self.tag_text(format_long_date(value), concept, context_ref)
        el.set("format", DATE_FORMAT)
        return el

    def append_amount(
        self,
        parent: etree._Element,
        value: Decimal | int | str,
        concept: str,
        context_ref: str,
        unit_ref: str,
        decimals: int = 0,
    ) -> etree._Element:
        """Tag ``value`` into ``parent``, bracketing negatives outside the tag."""
        el = self.tag(value, concept, context_ref, unit_ref, decimals)
        negative = el.get("sign") == "-"
        if negative:
            _append_text(parent, "(")
        parent.append(el)
        if negative:
            el.tail = ")"
        return el


def _append_text(parent: etree._Element, text: str) -> None:
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


__all__ = ["InlineTagger", "format_amount", "format_long_date", "round_amount"]
