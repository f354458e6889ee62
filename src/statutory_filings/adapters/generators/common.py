# src/statutory_filings/adapters/generators/common.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Shared helpers for filing body generators."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Final

from lxml import etree

from statutory_filings.domain.entities.confirmation_statement import Address

CH_SCHEMA_NS: Final[str] = "http://xmlgw.companieshouse.gov.uk/v2-1/schema"

EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Characters outside the XML 1.0 Char production.
_XML_UNSAFE: Final[re.Pattern[str]] = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class BodyBuilder:
    """Namespace-bound element factory for one body fragment."""

    def __init__(self, namespace: str) -> None:
        self._ns = namespace

    def root(self, name: str) -> etree._Element:
        return etree.Element(f"{{{self._ns}}}{name}", nsmap={None: self._ns})

    def sub(self, parent: etree._Element, name: str, text: object | None = None) -> etree._Element:
        el = etree.SubElement(parent, f"{{{self._ns}}}{name}")
        if text is not None:
            el.text = format_value(text)
        return el

    def address(self, parent: etree._Element, name: str, address: Address) -> etree._Element:
        """Append an address block (at most two street lines)."""
        el = self.sub(parent, name)
        for index, line in enumerate(address.lines[:2], start=1):
            self.sub(el, f"AddressLine{index}", line)
        self.sub(el, "City", address.city)
        self.sub(el, "Postcode", address.postcode)
        self.sub(el, "Country", address.country)
        return el


def format_value(value: object) -> str:
    """Render a scalar for an XML text node."""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def xml_unsafe_fields(value: object, path: str) -> list[str]:
    """Return the paths of every string under ``value`` that XML cannot carry.

    Walks dataclass fields, sequences and mappings; ``path`` names ``value``
    itself, e.g. ``shareholders[0].name``.
    """
    if isinstance(value, str):
        return [path] if _XML_UNSAFE.search(value) else []
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        found: list[str] = []
        for f in dataclasses.fields(value):
            found.extend(xml_unsafe_fields(getattr(value, f.name), f"{path}.{f.name}"))
        return found
    if isinstance(value, Mapping):
        return [p for key, item in value.items() for p in xml_unsafe_fields(item, f"{path}[{key!r}]")]
    if isinstance(value, (list, tuple)):
        return [p for index, item in enumerate(value) for p in xml_unsafe_fields(item, f"{path}[{index}]")]
    return []


def xml_unsafe_errors(value: object, path: str) -> list[str]:
    """Return one validation message per field holding characters XML cannot carry."""
    return [f"{field} contains characters not allowed in XML" for field in xml_unsafe_fields(value, path)]


def serialize(root: etree._Element) -> str:
    """Serialize a body fragment (no XML declaration)."""
    return etree.tostring(root, encoding="unicode", pretty_print=True)


__all__ = [
    "CH_SCHEMA_NS",
    "EMAIL_PATTERN",
    "BodyBuilder",
    "format_value",
    "serialize",
    "xml_unsafe_errors",
    "xml_unsafe_fields",
]
