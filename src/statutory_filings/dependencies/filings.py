# src/statutory_filings/dependencies/filings.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Dependency wiring for filing submissions (transports, authenticators, use cases).

Overview:
    Resolves :class:`FilingSettings` once and builds the three orchestrators
    with their authenticators and per-gateway transport clients.

Layer:
    dependencies

Design:
    * Settings are converted into frozen config structs here; nothing below
      this module reads configuration on its own.
    * One :class:`GovTalkClient` per gateway. A shared ``httpx.AsyncClient``
      may be injected, in which case the caller owns its lifecycle.
    * Payment capture is external: the caller supplies a :class:`FeeCollector`.
    * Construction fails fast with :class:`ConfigurationError` when live mode
      lacks credentials.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from statutory_filings.adapters.govtalk.auth import (
    CompaniesHouseAuthenticator,
    HMRCAuthenticator,
    SenderProfile,
)
from statutory_filings.adapters.ixbrl.document import TaggedDocumentGenerator
from statutory_filings.application.use_cases.filings.submit_annual_accounts import (
    SubmitAnnualAccountsUseCase,
)
from statutory_filings.application.use_cases.filings.submit_confirmation_statement import (
    SubmitConfirmationStatementUseCase,
)
from statutory_filings.application.use_cases.filings.submit_corporation_tax_return import (
    SubmitCorporationTaxReturnUseCase,
)
from statutory_filings.config.settings import FilingSettings, get_settings
from statutory_filings.domain.enums.filing import GatewayKind
from statutory_filings.domain.interfaces.gateways.fee_collector import FeeCollector
from statutory_filings.infrastructure.external_apis.govtalk.client import GovTalkClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilingServices:
    """Wired orchestrators plus the transports they share."""

    confirmation_statement: SubmitConfirmationStatementUseCase
    annual_accounts: SubmitAnnualAccountsUseCase
    corporation_tax: SubmitCorporationTaxReturnUseCase
    companies_house_client: GovTalkClient
    hmrc_client: GovTalkClient

    async def aclose(self) -> None:
        """Close transports that own their HTTP client."""
        await self.companies_house_client.aclose()
        await self.hmrc_client.aclose()


def build_filing_services(
    *,
    fee_collector: FeeCollector,
    settings: FilingSettings | None = None,
    http: httpx.AsyncClient | None = None,
    sender_profile: SenderProfile | None = None,
) -> FilingServices:
    """Build the filing orchestrators from settings.

    Args:
        fee_collector: Payment capture used for the confirmation statement fee.
        settings: Resolved settings; defaults to :func:`get_settings`.
        http: Optional shared HTTP client for both gateways.
        sender_profile: Vendor metadata for the HMRC ``IRheader``.

    Returns:
        FilingServices: Ready-to-use orchestrators.

    Raises:
        ConfigurationError: If live mode lacks credentials or an endpoint is
            malformed.
    """
    settings = settings or get_settings()
    auth = settings.to_auth_config()
    transport = settings.to_transport_config()

    ch_auth = CompaniesHouseAuthenticator(auth.companies_house, environment=auth.environment)
    hmrc_auth = HMRCAuthenticator(
        auth.hmrc,
        environment=auth.environment,
        sender_profile=sender_profile,
    )

    ch_client = GovTalkClient(auth.endpoint_for(GatewayKind.COMPANIES_HOUSE), transport, http=http)
    hmrc_client = GovTalkClient(auth.endpoint_for(GatewayKind.HMRC), transport, http=http)

    logger.info(
        "filings.dependencies.wired",
        extra={
            "environment": auth.environment.value,
            "ch_url": auth.companies_house_endpoint.url,
            "hmrc_url": auth.hmrc_endpoint.url,
            "shared_http": http is not None,
        },
    )
    return FilingServices(
        confirmation_statement=SubmitConfirmationStatementUseCase(
            authenticator=ch_auth,
            transport=ch_client,
            fee_collector=fee_collector,
            fee=settings.cs01_fee,
        ),
        annual_accounts=SubmitAnnualAccountsUseCase(
            authenticator=ch_auth,
            transport=ch_client,
            generator=TaggedDocumentGenerator(),
        ),
        corporation_tax=SubmitCorporationTaxReturnUseCase(
            authenticator=hmrc_auth,
            transport=hmrc_client,
        ),
        companies_house_client=ch_client,
        hmrc_client=hmrc_client,
    )


__all__ = ["FilingServices", "build_filing_services"]
