# src/statutory_filings/adapters/govtalk/auth.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk authentication strategies.

Purpose:
    Turn a :class:`FilingRequest` into a fully authenticated envelope for one
    of the two gateways:

    * Companies House (hash-based): ``CHMD5`` authentication, i.e. the
      upper-case hex MD5 of the presenter authentication code. Single pass.
    * HMRC (mark-based): cleartext sender credentials in the ``IRheader`` and
      a generic IRmark over the body, built with the two-pass protocol.

Layer:
    adapters/govtalk

Notes:
    - Credentials arrive as explicit structs; nothing here reads the process
      environment.
    - Live mode with a missing credential raises ``ConfigurationError`` at
      construction.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, Protocol

from lxml import etree

from statutory_filings.adapters.govtalk.envelope import (
    CH_SCHEMA_LOCATION,
    GovTalkEnvelopeBuilder,
    parse_fragment,
)
from statutory_filings.adapters.govtalk.irmark import build_marked_envelope
from statutory_filings.config.settings import CompaniesHouseCredentials, HMRCCredentials
from statutory_filings.domain.entities.envelope import (
    Authentication,
    EnvelopeHeader,
    FilingRequest,
    MessageDetails,
    SenderDetails,
)
from statutory_filings.domain.enums.filing import Environment, GatewayKind, MessageQualifier
from statutory_filings.domain.exceptions.filing import (
    ConfigurationError,
    FilingValidationError,
)

CHMD5_METHOD: Final[str] = "CHMD5"
CLEAR_METHOD: Final[str] = "clear"
HMRC_CT_NS: Final[str] = "http://www.govtalk.gov.uk/taxation/CT/2"
HMRC_VENDOR_URI: Final[str] = "https://www.hmrc.gov.uk/vendor/{vendor_id}"


class Authenticator(Protocol):
    """Common interface of the authentication strategies."""

    gateway: GatewayKind

    def build_authenticated_request(self, request: FilingRequest) -> str:
        """Return the complete envelope XML for ``request``."""


def chmd5(secret: str) -> str:
    """Return the upper-case hex MD5 digest of ``secret``."""
    return hashlib.md5(secret.encode("utf-8")).hexdigest().upper()  # noqa: S324


def _require(environment: Environment, **values: str | None) -> None:
    if environment is not Environment.LIVE:
        return
    missing = sorted(name for name, value in values.items() if not value)
    if missing:
        raise ConfigurationError(
            "Live gateway credentials are incomplete",
            details={"missing": missing},
        )


class CompaniesHouseAuthenticator:
    """Hash-based authentication for the Companies House XML gateway."""

    gateway = GatewayKind.COMPANIES_HOUSE

    def __init__(
        self,
        credentials: CompaniesHouseCredentials,
        *,
        environment: Environment = Environment.TEST,
        builder: GovTalkEnvelopeBuilder | None = None,
    ) -> None:
        _require(
            environment,
            presenter_id=credentials.presenter_id,
            password=credentials.password,
        )
        self._credentials = credentials
        self._environment = environment
        self._builder = builder or GovTalkEnvelopeBuilder(schema_location=CH_SCHEMA_LOCATION)
        self._auth_value = chmd5(credentials.password)

    def build_authenticated_request(self, request: FilingRequest) -> str:
        header = EnvelopeHeader(
            message_details=MessageDetails(
                message_class=request.message_class,
                qualifier=MessageQualifier.REQUEST,
                transaction_id=request.transaction_id,
                gateway_test=self._environment is Environment.TEST,
            ),
            sender_details=SenderDetails(
                sender_id=self._credentials.presenter_id,
                authentication=Authentication(method=CHMD5_METHOD, value=self._auth_value),
                email=self._credentials.email,
            ),
        )
        return self._builder.build(header, request.body_xml, request.keys)


@dataclass(frozen=True)
class SenderProfile:
    """Vendor and contact metadata carried in the ``IRheader/Sender`` block."""

    name: str = "Statutory Filings"
    capacity: str = "Agent"
    address_lines: Sequence[str] = ("PromptSubmissions", "UK")
    contact_name: str = "Filing Support"
    contact_email: str | None = None
    contact_telephone: str | None = None


def _ct(parent: etree._Element, name: str, text: str | None = None) -> etree._Element:
    el = etree.SubElement(parent, f"{{{HMRC_CT_NS}}}{name}")
    if text is not None:
        el.text = text
    return el


class HMRCAuthenticator:
    """Mark-based authentication for the HMRC Government Gateway."""

    gateway = GatewayKind.HMRC

    def __init__(
        self,
        credentials: HMRCCredentials,
        *,
        environment: Environment = Environment.TEST,
        sender_profile: SenderProfile | None = None,
        builder: GovTalkEnvelopeBuilder | None = None,
        currency: str = "GBP",
    ) -> None:
        _require(
            environment,
            sender_id=credentials.sender_id,
            password=credentials.password,
        )
        self._credentials = credentials
        self._environment = environment
        self._profile = sender_profile or SenderProfile()
        self._builder = builder or GovTalkEnvelopeBuilder()
        self._currency = currency

    def _utr_for(self, request: FilingRequest) -> str:
        for key_type, value in request.keys:
            if key_type == "UTR" and value:
                return value
        if self._credentials.utr:
            return self._credentials.utr
        raise FilingValidationError("UTR is required for HMRC submissions")

    def render_ir_envelope(self, request: FilingRequest, *, utr: str, mark: str) -> str:
        """Render the ``IRenvelope`` body (IRheader + filing body) with ``mark``."""
        if not request.period_end:
            raise FilingValidationError("Period end is required for HMRC submissions")

        envelope = etree.Element(f"{{{HMRC_CT_NS}}}IRenvelope", nsmap={None: HMRC_CT_NS})
        header = _ct(envelope, "IRheader")
        keys = _ct(header, "Keys")
        _ct(keys, "Key", utr).set("Type", "UTR")
        _ct(header, "PeriodEnd", request.period_end)
        _ct(header, "DefaultCurrency", self._currency)
        _ct(header, "IRmark", mark).set("Type", "generic")

        profile = self._profile
        sender = _ct(header, "Sender")
        _ct(sender, "SenderID", self._credentials.sender_id)
        _ct(sender, "Password", self._credentials.password)
        _ct(sender, "URI", HMRC_VENDOR_URI.format(vendor_id=self._credentials.vendor_id))
        _ct(sender, "Name", profile.name)
        _ct(sender, "Capacity", profile.capacity)
        if profile.address_lines:
            address = _ct(sender, "Address")
            for line in profile.address_lines:
                _ct(address, "Line", line)
        contact = _ct(sender, "Contact")
        _ct(contact, "Name", profile.contact_name)
        if profile.contact_email:
            _ct(contact, "Email", profile.contact_email)
        if profile.contact_telephone:
            _ct(contact, "Telephone", profile.contact_telephone)

        for child in parse_fragment(request.body_xml):
            envelope.append(child)
        return etree.tostring(envelope, encoding="unicode")

    def build_authenticated_request(self, request: FilingRequest) -> str:
        utr = self._utr_for(request)
        keys = tuple(request.keys) or (("UTR", utr),)
        header = EnvelopeHeader(
            message_details=MessageDetails(
                message_class=request.message_class,
                qualifier=MessageQualifier.REQUEST,
                transaction_id=request.transaction_id,
                gateway_test=self._environment is Environment.TEST,
            ),
            sender_details=SenderDetails(
                sender_id=self._credentials.sender_id,
                authentication=Authentication(
                    method=CLEAR_METHOD,
                    value=self._credentials.password,
                ),
            ),
        )

        def _render(mark: str) -> str:
            body = self.render_ir_envelope(request, utr=utr, mark=mark)
            return self._builder.build(header, body, keys)

        envelope, _mark = build_marked_envelope(_render)
        return envelope
