# tests/unit/config/test_settings.py
from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

import pytest
from pydantic import ValidationError

from statutory_filings.config.settings import (
    CH_GATEWAY_URL,
    HMRC_LIVE_GATEWAY_URL,
    HMRC_TEST_GATEWAY_URL,
    HMRC_TEST_SENDER_ID,
    HMRC_TEST_UTR,
    CompaniesHouseCredentials,
    FilingAuthConfig,
    FilingSettings,
    GatewayEndpoint,
    HMRCCredentials,
    get_settings,
)
from statutory_filings.domain.enums.filing import Environment, GatewayKind
from statutory_filings.domain.exceptions.filing import ConfigurationError

_LIVE_CREDENTIALS = {
    "FILING_CH_PRESENTER_ID": "PRESENTER01",
    "FILING_CH_PASSWORD": "auth-code",
    "FILING_HMRC_SENDER_ID": "SENDER01",
    "FILING_HMRC_PASSWORD": "secret",
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (*_LIVE_CREDENTIALS, "FILING_ENVIRONMENT", "FILING_HMRC_UTR", "FILING_CS01_FEE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _settings() -> FilingSettings:
    return FilingSettings(_env_file=None)  # type: ignore[call-arg]


def test_defaults_resolve_to_test_gateways() -> None:
    settings = _settings()
    auth = settings.to_auth_config()

    assert settings.environment is Environment.TEST
    assert settings.cs01_fee == Decimal("34.00")
    assert auth.is_test is True
    assert auth.endpoint_for(GatewayKind.COMPANIES_HOUSE).url == CH_GATEWAY_URL
    assert auth.endpoint_for(GatewayKind.HMRC).url == HMRC_TEST_GATEWAY_URL
    assert auth.hmrc.sender_id == HMRC_TEST_SENDER_ID
    assert auth.hmrc.utr == HMRC_TEST_UTR


def test_transport_config_mirrors_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILING_MAX_RETRIES", "5")
    monkeypatch.setenv("FILING_TIMEOUT_S", "12.5")

    transport = _settings().to_transport_config()

    assert transport.max_retries == 5
    assert transport.timeout_s == 12.5


def test_live_mode_without_credentials_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILING_ENVIRONMENT", "live")

    with pytest.raises(ValidationError) as excinfo:
        _settings()

    message = str(excinfo.value)
    assert "FILING_CH_PRESENTER_ID" in message
    assert "FILING_HMRC_PASSWORD" in message


def test_get_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILING_ENVIRONMENT", "live")

    with pytest.raises(ConfigurationError):
        get_settings()


def test_live_mode_with_credentials_uses_live_endpoints(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILING_ENVIRONMENT", "live")
    for name, value in _LIVE_CREDENTIALS.items():
        monkeypatch.setenv(name, value)

    settings = _settings()
    auth = settings.to_auth_config()

    assert auth.is_test is False
    assert auth.hmrc_endpoint.url == HMRC_LIVE_GATEWAY_URL
    assert auth.hmrc.utr is None
    assert auth.companies_house.password == "auth-code"
    assert "auth-code" not in repr(settings)


def test_auth_config_rejects_malformed_endpoint() -> None:
    with pytest.raises(ConfigurationError):
        FilingAuthConfig(
            environment=Environment.TEST,
            companies_house=CompaniesHouseCredentials("P", "x"),
            hmrc=HMRCCredentials("S", "y"),
            companies_house_endpoint=GatewayEndpoint(GatewayKind.COMPANIES_HOUSE, "ftp://gateway"),
            hmrc_endpoint=GatewayEndpoint(GatewayKind.HMRC, HMRC_TEST_GATEWAY_URL),
        )


def test_live_auth_config_requires_https_and_credentials() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        FilingAuthConfig(
            environment=Environment.LIVE,
            companies_house=CompaniesHouseCredentials("", ""),
            hmrc=HMRCCredentials("S", "y"),
            companies_house_endpoint=GatewayEndpoint(GatewayKind.COMPANIES_HOUSE, CH_GATEWAY_URL),
            hmrc_endpoint=GatewayEndpoint(GatewayKind.HMRC, HMRC_LIVE_GATEWAY_URL),
        )

    assert excinfo.value.details["missing"] == ["FILING_CH_PRESENTER_ID", "FILING_CH_PASSWORD"]


def test_endpoint_content_types() -> None:
    ch = GatewayEndpoint(GatewayKind.COMPANIES_HOUSE, CH_GATEWAY_URL)
    hmrc = GatewayEndpoint(GatewayKind.HMRC, HMRC_TEST_GATEWAY_URL)

    assert ch.content_type == "text/xml; charset=UTF-8"
    assert hmrc.content_type == "application/xml; charset=UTF-8"
