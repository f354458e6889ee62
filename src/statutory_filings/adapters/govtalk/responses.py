# src/statutory_filings/adapters/govtalk/responses.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Gateway response parsing.

Purpose:
    Decide whether a gateway accepted a submission, and extract its
    reference and any error messages.

Layer:
    adapters/govtalk

Design:
    - Responses are untrusted input and are parsed with ``defusedxml``.
    - Elements are matched by local name so namespaced and plain responses
      are treated alike.
    - The verdict comes from an ordered tuple of matchers. Each matcher
      returns True (accepted), False (rejected) or None (no opinion, fall
      through). The first opinion wins; if none has one, the submission is
      not accepted.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final
from xml.etree.ElementTree import Element, ParseError  # stdlib typed

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from statutory_filings.domain.entities.submission import ParsedGatewayResponse
from statutory_filings.domain.enums.filing import MessageQualifier
from statutory_filings.domain.exceptions.filing import TerminalTransportError

# Reference elements, in lookup order. CorrelationID is only a fallback for
# the reference; it is echoed on every response and never implies acceptance.
ACCEPTANCE_REFERENCE_ELEMENTS: Final[tuple[str, ...]] = (
    "CompaniesHouseReference",
    "SubmissionNumber",
    "ConfirmationCode",
    "BarCode",
)
REFERENCE_ELEMENTS: Final[tuple[str, ...]] = (*ACCEPTANCE_REFERENCE_ELEMENTS, "CorrelationID")

_ACCEPTED_STATUSES: Final[frozenset[str]] = frozenset({"success", "accepted"})
_REJECTED_STATUSES: Final[frozenset[str]] = frozenset({"rejected", "failure", "failed", "error"})
_ACCEPTED_QUALIFIERS: Final[frozenset[str]] = frozenset(
    {MessageQualifier.ACKNOWLEDGEMENT.value, MessageQualifier.RESPONSE.value}
)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


@dataclass
class _ResponseView:
    """Parsed response indexed by element local name."""

    root: Element
    texts: dict[str, list[str]] = field(default_factory=lambda: defaultdict(list))

    @classmethod
    def from_root(cls, root: Element) -> _ResponseView:
        view = cls(root=root)
        for el in root.iter():
            if not isinstance(el.tag, str):
                continue
            text = (el.text or "").strip()
            if text:
                view.texts[_local(el.tag)].append(text)
        return view

    def first(self, name: str) -> str | None:
        values = self.texts.get(name)
        return values[0] if values else None


Matcher = Callable[[_ResponseView], bool | None]


def _match_error_qualifier(view: _ResponseView) -> bool | None:
    qualifier = (view.first("Qualifier") or "").lower()
    return False if qualifier == MessageQualifier.ERROR.value else None


def _match_status_markers(view: _ResponseView) -> bool | None:
    status = (view.first("Status") or "").lower()
    if status in _ACCEPTED_STATUSES:
        return True
    if status in _REJECTED_STATUSES:
        return False
    if view.first("StatusCode") == "1":
        return True
    if (view.first("Response") or "").lower() == "accepted":
        return True
    return None


def _match_accepted_qualifier(view: _ResponseView) -> bool | None:
    qualifier = (view.first("Qualifier") or "").lower()
    return True if qualifier in _ACCEPTED_QUALIFIERS else None


def _match_reference_present(view: _ResponseView) -> bool | None:
    return True if any(view.first(name) for name in ACCEPTANCE_REFERENCE_ELEMENTS) else None


MATCHERS: Final[tuple[tuple[str, Matcher], ...]] = (
    ("error_qualifier", _match_error_qualifier),
    ("status_marker", _match_status_markers),
    ("accepted_qualifier", _match_accepted_qualifier),
    ("reference_present", _match_reference_present),
)


def _error_element_message(el: Element) -> str | None:
    children = {
        _local(child.tag): (child.text or "").strip()
        for child in el
        if isinstance(child.tag, str)
    }
    if not children:
        return (el.text or "").strip() or None
    text = children.get("Text") or children.get("Message") or ""
    number = children.get("Number")
    location = children.get("Location")
    if not text and not number:
        return None
    message = f"{number}: {text}" if number and text else (text or number or "")
    if location:
        message = f"{message} (at {location})"
    return message


def extract_errors(root: Element) -> list[str]:
    """Collect error texts from ``Error``, ``Message`` and ``Text`` elements.

    ``Text``/``Message`` children of an ``Error`` are folded into that
    error's message. Duplicates are dropped; document order is kept.
    """
    errors: list[str] = []
    seen: set[str] = set()

    def _add(message: str | None) -> None:
        if message and message not in seen:
            seen.add(message)
            errors.append(message)

    def _visit(el: Element, inside_error: bool) -> None:
        if not isinstance(el.tag, str):
            return
        name = _local(el.tag)
        if name == "Error":
            _add(_error_element_message(el))
            inside_error = True
        elif name in ("Message", "Text") and not inside_error:
            _add((el.text or "").strip() or None)
        for child in el:
            _visit(child, inside_error)

    _visit(root, False)
    return errors


def extract_reference(view_or_root: _ResponseView | Element) -> str | None:
    """Return the first reference found in ``REFERENCE_ELEMENTS`` order."""
    view = (
        view_or_root
        if isinstance(view_or_root, _ResponseView)
        else _ResponseView.from_root(view_or_root)
    )
    for name in REFERENCE_ELEMENTS:
        value = view.first(name)
        if value:
            return value
    return None


def parse_xml(text: str) -> Element:
    """Parse untrusted response XML.

    Raises:
        TerminalTransportError: If the body is not well-formed or uses
            forbidden constructs (entities, external references).
    """
    try:
        return ET.fromstring(text.encode("utf-8") if isinstance(text, str) else text)
    except (ParseError, DefusedXmlException) as exc:
        raise TerminalTransportError(
            "Gateway response is not well-formed XML",
            response_text=text,
            details={"error": str(exc)},
        ) from exc


def parse_gateway_response(text: str) -> ParsedGatewayResponse:
    """Interpret a gateway response body.

    Returns:
        The verdict, the reference (if any), every extracted error message and
        the name of the matcher that decided.

    Raises:
        TerminalTransportError: If the body is not well-formed XML.
    """
    root = parse_xml(text)
    view = _ResponseView.from_root(root)

    accepted = False
    matched_by: str | None = None
    for name, matcher in MATCHERS:
        verdict = matcher(view)
        if verdict is not None:
            accepted, matched_by = verdict, name
            break

    return ParsedGatewayResponse(
        accepted=accepted,
        reference=extract_reference(view),
        errors=tuple(extract_errors(root)),
        matched_by=matched_by,
    )
