# src/statutory_filings/adapters/ixbrl/taxonomy.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""iXBRL namespaces, schema references and concept names.

Purpose:
    Single source of the XML namespaces, context/unit identifiers and
    taxonomy entry points used by the tagged-document generator.

Layer:
    adapters/ixbrl

Notes:
    - Concept QNames are prefixed strings (``uk-core:Turnover``); the
      prefixes are declared on the document root from ``NSMAP``.
    - Schema entry point depends on entity size only.
"""

from __future__ import annotations

from typing import Final

from statutory_filings.domain.enums.filing import EntitySize

XHTML_NS: Final[str] = "http://www.w3.org/1999/xhtml"
IX_NS: Final[str] = "http://www.xbrl.org/2013/inlineXBRL"
IXT_NS: Final[str] = "http://www.xbrl.org/inlineXBRL/transformation/2020-02-12"
XBRLI_NS: Final[str] = "http://www.xbrl.org/2003/instance"
LINK_NS: Final[str] = "http://www.xbrl.org/2003/linkbase"
XLINK_NS: Final[str] = "http://www.w3.org/1999/xlink"
ISO4217_NS: Final[str] = "http://www.xbrl.org/2003/iso4217"
UK_CORE_NS: Final[str] = "http://xbrl.frc.org.uk/fr/2025-01-01/core"
UK_BUS_NS: Final[str] = "http://xbrl.frc.org.uk/cd/2025-01-01/business"
UK_DIREP_NS: Final[str] = "http://xbrl.frc.org.uk/reports/2025-01-01/direp"

NSMAP: Final[dict[str | None, str]] = {
    None: XHTML_NS,
    "ix": IX_NS,
    "ixt": IXT_NS,
    "xbrli": XBRLI_NS,
    "link": LINK_NS,
    "xlink": XLINK_NS,
    "iso4217": ISO4217_NS,
    "uk-core": UK_CORE_NS,
    "uk-bus": UK_BUS_NS,
    "uk-direp": UK_DIREP_NS,
}

CONCEPT_PREFIXES: Final[frozenset[str]] = frozenset({"uk-core", "uk-bus", "uk-direp"})

ENTITY_SCHEME: Final[str] = "http://www.companieshouse.gov.uk/"

# Context identifiers.
CURRENT: Final[str] = "current"
PREVIOUS: Final[str] = "previous"
BALANCE_SHEET: Final[str] = "balance-sheet"
BALANCE_SHEET_PREVIOUS: Final[str] = "balance-sheet-previous"

PURE_UNIT: Final[str] = "pure"

NUMBER_FORMAT: Final[str] = "ixt:num-dot-decimal"
DATE_FORMAT: Final[str] = "ixt:date-day-monthname-year-en"

_SCHEMA_BASE: Final[str] = "http://xbrl.frc.org.uk/fr/2025-01-01"

SCHEMA_REFS: Final[dict[EntitySize, str]] = {
    EntitySize.MICRO: f"{_SCHEMA_BASE}/uk-gaap-frs-105-2025-01-01.xsd",
    EntitySize.SMALL: f"{_SCHEMA_BASE}/uk-gaap-frs-102-2025-01-01.xsd",
    EntitySize.MEDIUM: f"{_SCHEMA_BASE}/uk-gaap-frs-102-2025-01-01.xsd",
    EntitySize.LARGE: f"{_SCHEMA_BASE}/uk-ifrs-2025-01-01.xsd",
}


def schema_ref_for(size: EntitySize) -> str:
    """Return the taxonomy entry point for an entity size."""
    return SCHEMA_REFS[size]


def core(name: str) -> str:
    return f"uk-core:{name}"


def bus(name: str) -> str:
    return f"uk-bus:{name}"


def direp(name: str) -> str:
    return f"uk-direp:{name}"


def ix(name: str) -> str:
    """Return the Clark-notation name of an ``ix:`` element."""
    return f"{{{IX_NS}}}{name}"


def xbrli(name: str) -> str:
    return f"{{{XBRLI_NS}}}{name}"


def xhtml(name: str) -> str:
    return f"{{{XHTML_NS}}}{name}"


def declared_contexts(*, comparatives: bool) -> tuple[str, ...]:
    """Return the context ids a document declares."""
    if comparatives:
        return (CURRENT, PREVIOUS, BALANCE_SHEET, BALANCE_SHEET_PREVIOUS)
    return (CURRENT, BALANCE_SHEET)


__all__ = [
    "BALANCE_SHEET",
    "BALANCE_SHEET_PREVIOUS",
    "CONCEPT_PREFIXES",
    "CURRENT",
    "DATE_FORMAT",
    "ENTITY_SCHEME",
    "IX_NS",
    "NSMAP",
    "NUMBER_FORMAT",
    "PREVIOUS",
    "PURE_UNIT",
    "SCHEMA_REFS",
    "XHTML_NS",
    "bus",
    "core",
    "declared_contexts",
    "direp",
    "schema_ref_for",
]
