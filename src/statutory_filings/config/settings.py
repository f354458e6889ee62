# src/statutory_filings/config/settings.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the filing pipeline: gateway
    environment, per-gateway credentials and endpoints, transport timeouts
    and retry budget, and the confirmation statement fee.

Design:
    - Pydantic v2 BaseSettings with env prefix ``FILING_`` and ``.env`` support.
    - Secrets are ``SecretStr`` and are never logged.
    - Live mode requires every credential; absence fails at resolution time
      with :class:`ConfigurationError`, never a silent fallback.
    - Settings are resolved once (``get_settings``) and converted into frozen
      config structs passed by value into authenticators and transports. No
      other module reads the process environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Final

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statutory_filings.domain.enums.filing import Environment, GatewayKind
from statutory_filings.domain.exceptions.filing import ConfigurationError

logger = logging.getLogger(__name__)

CH_GATEWAY_URL: Final[str] = "https://xmlgw.companieshouse.gov.uk/v1-0/xmlgw/Gateway"
HMRC_TEST_GATEWAY_URL: Final[str] = "https://secure.dev.gateway.gov.uk/submission"
HMRC_LIVE_GATEWAY_URL: Final[str] = "https://secure.gateway.gov.uk/submission"

HMRC_VENDOR_ID: Final[str] = "9233"
HMRC_TEST_SENDER_ID: Final[str] = "CTUser100"
HMRC_TEST_UTR: Final[str] = "8596148860"

CS01_FEE: Final[Decimal] = Decimal("34.00")


# --------------------------------------------------------------------------- #
# Resolved config structs (passed by value)
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class CompaniesHouseCredentials:
    presenter_id: str
    password: str
    email: str | None = None


@dataclass(frozen=True)
class HMRCCredentials:
    sender_id: str
    password: str
    vendor_id: str = HMRC_VENDOR_ID
    utr: str | None = None


@dataclass(frozen=True)
class GatewayEndpoint:
    """Resolved URL and content type of one gateway."""

    kind: GatewayKind
    url: str

    @property
    def content_type(self) -> str:
        match self.kind:
            case GatewayKind.COMPANIES_HOUSE:
                return "text/xml; charset=UTF-8"
            case GatewayKind.HMRC:
                return "application/xml; charset=UTF-8"


@dataclass(frozen=True)
class FilingAuthConfig:
    """Credentials and endpoints for one environment.

    Raises:
        ConfigurationError: On construction, when live mode lacks a
            credential or an endpoint is not an http(s) URL.
    """

    environment: Environment
    companies_house: CompaniesHouseCredentials
    hmrc: HMRCCredentials
    companies_house_endpoint: GatewayEndpoint
    hmrc_endpoint: GatewayEndpoint

    def __post_init__(self) -> None:
        for endpoint in (self.companies_house_endpoint, self.hmrc_endpoint):
            _require_url(endpoint.url, live=self.environment is Environment.LIVE)
        if self.environment is Environment.LIVE:
            missing = _missing_live_credentials(
                ch_presenter_id=self.companies_house.presenter_id,
                ch_password=self.companies_house.password,
                hmrc_sender_id=self.hmrc.sender_id,
                hmrc_password=self.hmrc.password,
            )
            if missing:
                raise ConfigurationError(
                    "Missing live filing credentials",
                    details={"missing": missing},
                )

    @property
    def is_test(self) -> bool:
        return self.environment is Environment.TEST

    def endpoint_for(self, kind: GatewayKind) -> GatewayEndpoint:
        match kind:
            case GatewayKind.COMPANIES_HOUSE:
                return self.companies_house_endpoint
            case GatewayKind.HMRC:
                return self.hmrc_endpoint


@dataclass(frozen=True)
class TransportConfig:
    timeout_s: float = 30.0
    max_retries: int = 3
    backoff_base_s: float = 1.0
    backoff_cap_s: float = 16.0


def _require_url(url: str, *, live: bool) -> None:
    allowed = ("https://",) if live else ("https://", "http://")
    if not url or not url.startswith(allowed):
        raise ConfigurationError(
            "Malformed gateway endpoint",
            details={"url": url, "live": live},
        )


def _missing_live_credentials(**values: str | None) -> list[str]:
    return [f"FILING_{name.upper()}" for name, value in values.items() if not value]


# --------------------------------------------------------------------------- #
# Settings
# --------------------------------------------------------------------------- #


class FilingSettings(BaseSettings):
    """Typed configuration for the filing pipeline.

    Environment variables (with ``model_config.env_prefix``):

    * ``FILING_ENVIRONMENT`` (``test`` | ``live``)
    * ``FILING_CH_PRESENTER_ID`` / ``FILING_CH_PASSWORD`` / ``FILING_CH_EMAIL``
    * ``FILING_HMRC_SENDER_ID`` / ``FILING_HMRC_PASSWORD`` /
      ``FILING_HMRC_VENDOR_ID`` / ``FILING_HMRC_UTR``
    * ``FILING_*_TEST_URL`` / ``FILING_*_LIVE_URL``
    * ``FILING_TIMEOUT_S`` / ``FILING_MAX_RETRIES`` /
      ``FILING_BACKOFF_BASE_S`` / ``FILING_BACKOFF_CAP_S``
    * ``FILING_CS01_FEE``
    * ``LOG_LEVEL`` (no prefix)
    """

    environment: Environment = Field(
        default=Environment.TEST,
        description="Gateway environment; test unless explicitly set to live.",
    )

    # ---------------------------
    # Companies House
    # ---------------------------
    ch_presenter_id: str | None = Field(
        default=None,
        description="Companies House presenter id (sender id).",
    )
    ch_password: SecretStr | None = Field(
        default=None,
        description="Companies House presenter authentication code.",
    )
    ch_email: str | None = Field(
        default=None,
        description="Contact email sent in the GovTalk sender details.",
    )
    ch_test_url: str = Field(default=CH_GATEWAY_URL)
    ch_live_url: str = Field(default=CH_GATEWAY_URL)

    # ---------------------------
    # HMRC
    # ---------------------------
    hmrc_sender_id: str | None = Field(
        default=None,
        description="Government Gateway sender id. Test mode falls back to the HMRC test user.",
    )
    hmrc_password: SecretStr | None = Field(default=None)
    hmrc_vendor_id: str = Field(default=HMRC_VENDOR_ID)
    hmrc_utr: str | None = Field(
        default=None,
        description="Default UTR keyed on CT600 submissions. Test mode falls back to the test UTR.",
    )
    hmrc_test_url: str = Field(default=HMRC_TEST_GATEWAY_URL)
    hmrc_live_url: str = Field(default=HMRC_LIVE_GATEWAY_URL)

    # ---------------------------
    # Transport
    # ---------------------------
    timeout_s: float = Field(default=30.0, ge=0.1, le=300.0)
    max_retries: int = Field(default=3, ge=0, le=10)
    backoff_base_s: float = Field(default=1.0, ge=0.0, le=60.0)
    backoff_cap_s: float = Field(default=16.0, ge=0.0, le=600.0)

    # ---------------------------
    # Fees / logging
    # ---------------------------
    cs01_fee: Decimal = Field(default=CS01_FEE, ge=0)
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO').",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_prefix="FILING_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _require_live_credentials(self) -> FilingSettings:
        """Reject live mode unless every gateway credential is present.

        Raises:
            ValueError: Naming the missing variables (never their values).
        """
        if self.environment is not Environment.LIVE:
            return self
        missing = _missing_live_credentials(
            ch_presenter_id=self.ch_presenter_id,
            ch_password=self.ch_password.get_secret_value() if self.ch_password else None,
            hmrc_sender_id=self.hmrc_sender_id,
            hmrc_password=self.hmrc_password.get_secret_value() if self.hmrc_password else None,
        )
        if missing:
            raise ValueError(f"Live filing mode requires: {', '.join(missing)}")
        return self

    def to_auth_config(self) -> FilingAuthConfig:
        """Resolve credentials and endpoints for the configured environment."""
        live = self.environment is Environment.LIVE
        ch_password = self.ch_password.get_secret_value() if self.ch_password else ""
        hmrc_password = self.hmrc_password.get_secret_value() if self.hmrc_password else ""
        return FilingAuthConfig(
            environment=self.environment,
            companies_house=CompaniesHouseCredentials(
                presenter_id=self.ch_presenter_id or "",
                password=ch_password,
                email=self.ch_email,
            ),
            hmrc=HMRCCredentials(
                sender_id=self.hmrc_sender_id or ("" if live else HMRC_TEST_SENDER_ID),
                password=hmrc_password,
                vendor_id=self.hmrc_vendor_id,
                utr=self.hmrc_utr or (None if live else HMRC_TEST_UTR),
            ),
            companies_house_endpoint=GatewayEndpoint(
                GatewayKind.COMPANIES_HOUSE,
                self.ch_live_url if live else self.ch_test_url,
            ),
            hmrc_endpoint=GatewayEndpoint(
                GatewayKind.HMRC,
                self.hmrc_live_url if live else self.hmrc_test_url,
            ),
        )

    def to_transport_config(self) -> TransportConfig:
        return TransportConfig(
            timeout_s=self.timeout_s,
            max_retries=self.max_retries,
            backoff_base_s=self.backoff_base_s,
            backoff_cap_s=self.backoff_cap_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> FilingSettings:
    """Return a cached singleton ``FilingSettings`` instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        settings = FilingSettings()
    except ValidationError as exc:
        logger.exception("filings.settings.invalid")
        raise ConfigurationError(f"Invalid filing configuration: {exc}") from exc
    logger.info(
        "filings.settings.initialized",
        extra={
            "environment": settings.environment.value,
            "ch_presenter_id_set": bool(settings.ch_presenter_id),
            "ch_password_set": settings.ch_password is not None,
            "hmrc_sender_id_set": bool(settings.hmrc_sender_id),
            "hmrc_password_set": settings.hmrc_password is not None,
            "timeout_s": settings.timeout_s,
            "max_retries": settings.max_retries,
        },
    )
    return settings


__all__ = [
    "CS01_FEE",
    "CompaniesHouseCredentials",
    "FilingAuthConfig",
    "FilingSettings",
    "GatewayEndpoint",
    "HMRCCredentials",
    "TransportConfig",
    "get_settings",
]
