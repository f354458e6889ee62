# tests/unit/adapters/govtalk/test_auth.py
from __future__ import annotations

import hashlib

import pytest
from lxml import etree

from statutory_filings.adapters.govtalk.auth import (
    HMRC_CT_NS,
    CompaniesHouseAuthenticator,
    HMRCAuthenticator,
    SenderProfile,
    chmd5,
)
from statutory_filings.adapters.govtalk.envelope import GOVTALK_NS
from statutory_filings.adapters.govtalk.irmark import IRMARK_PLACEHOLDER, compute_mark
from statutory_filings.config.settings import CompaniesHouseCredentials, HMRCCredentials
from statutory_filings.domain.entities.envelope import FilingRequest
from statutory_filings.domain.enums.filing import Environment
from statutory_filings.domain.exceptions.filing import ConfigurationError, FilingValidationError

NS = {"g": GOVTALK_NS, "ct": HMRC_CT_NS}

_CT_BODY = (
    f'<IRbody xmlns="{HMRC_CT_NS}"><CompanyTaxReturn ReturnType="new">'
    "<Turnover><Total>250000.00</Total></Turnover></CompanyTaxReturn></IRbody>"
)


def _ct_request(**overrides: object) -> FilingRequest:
    values: dict[str, object] = {
        "message_class": "HMRC-CT-CT600",
        "transaction_id": "CT600-1-ABC",
        "body_xml": _CT_BODY,
        "keys": (("UTR", "1234567890"),),
        "period_end": "2024-12-31",
    }
    values.update(overrides)
    return FilingRequest(**values)  # type: ignore[arg-type]


def test_chmd5_is_upper_case_hex_md5() -> None:
    assert chmd5("auth-code") == hashlib.md5(b"auth-code").hexdigest().upper()  # noqa: S324


def test_companies_house_envelope_carries_hash_authentication(
    ch_credentials: CompaniesHouseCredentials,
) -> None:
    auth = CompaniesHouseAuthenticator(ch_credentials)
    xml = auth.build_authenticated_request(
        FilingRequest(
            message_class="ConfirmationStatement",
            transaction_id="CS01-1-ABC",
            body_xml="<ConfirmationStatement/>",
            keys=(("CompanyNumber", "12345678"),),
        )
    )
    root = etree.fromstring(xml.encode("utf-8"))

    id_auth = root.find("g:Header/g:SenderDetails/g:IDAuthentication", NS)
    assert id_auth.findtext("g:SenderID", namespaces=NS) == "PRESENTER01"
    assert id_auth.findtext("g:Authentication/g:Method", namespaces=NS) == "CHMD5"
    assert id_auth.findtext("g:Authentication/g:Value", namespaces=NS) == chmd5("auth-code")
    assert "auth-code" not in xml
    assert root.findtext("g:Header/g:MessageDetails/g:GatewayTest", namespaces=NS) == "1"
    assert root.find("g:Body/ConfirmationStatement", NS) is not None


def test_live_mode_without_credentials_fails_fast() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        CompaniesHouseAuthenticator(
            CompaniesHouseCredentials(presenter_id="", password=""),
            environment=Environment.LIVE,
        )
    assert exc_info.value.details["missing"]

    with pytest.raises(ConfigurationError):
        HMRCAuthenticator(
            HMRCCredentials(sender_id="CTUser100", password=""),
            environment=Environment.LIVE,
        )


def test_test_mode_accepts_blank_hmrc_sender_id() -> None:
    auth = HMRCAuthenticator(HMRCCredentials(sender_id="", password="", utr="8596148860"))

    xml = auth.build_authenticated_request(_ct_request())

    root = etree.fromstring(xml.encode("utf-8"))
    assert compute_mark(xml) == root.findtext(".//ct:IRheader/ct:IRmark", namespaces=NS)

    with pytest.raises(ConfigurationError) as exc_info:
        HMRCAuthenticator(HMRCCredentials(sender_id="", password="pw"), environment=Environment.LIVE)
    assert exc_info.value.details["missing"] == ["sender_id"]


def test_live_mode_turns_gateway_test_flag_off(ch_credentials: CompaniesHouseCredentials) -> None:
    auth = CompaniesHouseAuthenticator(ch_credentials, environment=Environment.LIVE)
    xml = auth.build_authenticated_request(
        FilingRequest(message_class="Accounts", transaction_id="AA-1", body_xml="")
    )
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.findtext("g:Header/g:MessageDetails/g:GatewayTest", namespaces=NS) == "0"


def test_hmrc_envelope_mark_validates_against_transmitted_body(
    hmrc_credentials: HMRCCredentials,
) -> None:
    auth = HMRCAuthenticator(hmrc_credentials, sender_profile=SenderProfile(contact_email="x@y.example"))
    xml = auth.build_authenticated_request(_ct_request())
    root = etree.fromstring(xml.encode("utf-8"))

    mark = root.findtext(".//ct:IRheader/ct:IRmark", namespaces=NS)
    assert mark
    assert IRMARK_PLACEHOLDER not in xml
    assert compute_mark(xml) == mark

    header = root.find(".//ct:IRheader", NS)
    assert header.findtext("ct:Keys/ct:Key", namespaces=NS) == "1234567890"
    assert header.findtext("ct:PeriodEnd", namespaces=NS) == "2024-12-31"
    assert header.findtext("ct:Sender/ct:SenderID", namespaces=NS) == "CTUser100"
    assert root.find(".//ct:IRenvelope/ct:IRbody", NS) is not None
    method = root.findtext("g:Header/g:SenderDetails/g:IDAuthentication/g:Authentication/g:Method", namespaces=NS)
    assert method == "clear"


def test_hmrc_mark_is_deterministic(hmrc_credentials: HMRCCredentials) -> None:
    auth = HMRCAuthenticator(hmrc_credentials)
    assert auth.build_authenticated_request(_ct_request()) == auth.build_authenticated_request(_ct_request())


def test_hmrc_utr_falls_back_to_credentials(hmrc_credentials: HMRCCredentials) -> None:
    auth = HMRCAuthenticator(hmrc_credentials)
    xml = auth.build_authenticated_request(_ct_request(keys=()))
    root = etree.fromstring(xml.encode("utf-8"))

    assert root.findtext(".//ct:IRheader/ct:Keys/ct:Key", namespaces=NS) == "8596148860"
    assert root.find("g:GovTalkDetails/g:Keys/g:Key", NS).get("Type") == "UTR"


def test_hmrc_requires_utr_and_period_end() -> None:
    auth = HMRCAuthenticator(HMRCCredentials(sender_id="CTUser100", password="pw"))

    with pytest.raises(FilingValidationError):
        auth.build_authenticated_request(_ct_request(keys=()))
    with pytest.raises(FilingValidationError):
        auth.build_authenticated_request(_ct_request(period_end=None))
