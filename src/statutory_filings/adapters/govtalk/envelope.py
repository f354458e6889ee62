# src/statutory_filings/adapters/govtalk/envelope.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk envelope builder.

Purpose:
    Wrap an XML body fragment in the GovTalk transport envelope: protocol
    version, message details, sender authentication, classification keys and
    body.

Layer:
    adapters/govtalk

Notes:
    - The body fragment is parsed and imported as XML, never re-escaped.
    - ``GovTalkDetails/Keys`` is always emitted, even when empty.
    - Construction is pure: identical inputs give identical output bytes.
"""

from __future__ import annotations

from typing import Final

from lxml import etree

from statutory_filings.domain.entities.envelope import EnvelopeHeader, Keys
from statutory_filings.domain.exceptions.filing import CanonicalizationError

GOVTALK_NS: Final[str] = "http://www.govtalk.gov.uk/CM/envelope"
XSI_NS: Final[str] = "http://www.w3.org/2001/XMLSchema-instance"
ENVELOPE_VERSION: Final[str] = "2.0"

CH_SCHEMA_LOCATION: Final[str] = (
    "http://www.govtalk.gov.uk/CM/envelope "
    "http://xmlgw.companieshouse.gov.uk/v1-0/schema/Egov_ch-v2-0.xsd"
)


def secure_parser() -> etree.XMLParser:
    """Return an lxml parser that never resolves entities or touches the network."""
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def parse_fragment(body_xml: str) -> list[etree._Element]:
    """Parse an XML fragment (zero or more sibling elements).

    Raises:
        CanonicalizationError: If the fragment is not well-formed.
    """
    if not body_xml or not body_xml.strip():
        return []
    text = body_xml.strip()
    if text.startswith("<?xml"):
        text = text.split("?>", 1)[1]
    try:
        wrapper = etree.fromstring(f"<fragment>{text}</fragment>".encode(), secure_parser())
    except etree.XMLSyntaxError as exc:
        raise CanonicalizationError(
            "Body fragment is not well-formed XML",
            details={"error": str(exc)},
        ) from exc
    return [child for child in wrapper if isinstance(child.tag, str)]


def _sub(parent: etree._Element, name: str, text: str | None = None) -> etree._Element:
    el = etree.SubElement(parent, f"{{{GOVTALK_NS}}}{name}")
    if text is not None:
        el.text = text
    return el


class GovTalkEnvelopeBuilder:
    """Build GovTalk envelopes.

    Args:
        schema_location: Optional ``xsi:schemaLocation`` for the root element.
        pretty_print: Indent the serialized envelope.
    """

    def __init__(self, *, schema_location: str | None = None, pretty_print: bool = True) -> None:
        self._schema_location = schema_location
        self._pretty_print = pretty_print

    def build(self, header: EnvelopeHeader, body_xml: str, keys: Keys = ()) -> str:
        """Render a complete envelope.

        Args:
            header: Message and sender details.
            body_xml: Well-formed body fragment; empty gives an empty ``Body``.
            keys: Ordered ``(type, value)`` classification keys.

        Returns:
            UTF-8 XML document text including the XML declaration.

        Raises:
            CanonicalizationError: If ``body_xml`` is not well-formed.
        """
        root = etree.Element(f"{{{GOVTALK_NS}}}GovTalkMessage", nsmap={None: GOVTALK_NS})
        if self._schema_location:
            root.set(f"{{{XSI_NS}}}schemaLocation", self._schema_location)

        _sub(root, "EnvelopeVersion", ENVELOPE_VERSION)

        header_el = _sub(root, "Header")
        details = header.message_details
        message_details = _sub(header_el, "MessageDetails")
        _sub(message_details, "Class", details.message_class)
        _sub(message_details, "Qualifier", details.qualifier.value)
        _sub(message_details, "TransactionID", details.transaction_id)
        if details.correlation_id:
            _sub(message_details, "CorrelationID", details.correlation_id)
        if details.gateway_test is not None:
            _sub(message_details, "GatewayTest", "1" if details.gateway_test else "0")

        sender = header.sender_details
        sender_details = _sub(header_el, "SenderDetails")
        id_auth = _sub(sender_details, "IDAuthentication")
        _sub(id_auth, "SenderID", sender.sender_id)
        if sender.authentication is not None:
            auth = _sub(id_auth, "Authentication")
            _sub(auth, "Method", sender.authentication.method)
            _sub(auth, "Value", sender.authentication.value)
        if sender.email:
            _sub(sender_details, "EmailAddress", sender.email)

        govtalk_details = _sub(root, "GovTalkDetails")
        keys_el = _sub(govtalk_details, "Keys")
        for key_type, value in keys:
            key_el = _sub(keys_el, "Key", value)
            key_el.set("Type", key_type)

        body_el = _sub(root, "Body")
        for child in parse_fragment(body_xml):
            body_el.append(child)

        return etree.tostring(
            root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=self._pretty_print,
        ).decode("utf-8")
