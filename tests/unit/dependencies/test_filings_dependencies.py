# tests/unit/dependencies/test_filings_dependencies.py
from __future__ import annotations

from decimal import Decimal

import httpx
import pytest
import respx

from statutory_filings.application.use_cases.filings import SubmitConfirmationStatementRequest
from statutory_filings.config.settings import FilingSettings
from statutory_filings.dependencies.filings import build_filing_services
from statutory_filings.domain.enums.filing import GatewayKind, SubmissionOutcome
from tests.fixtures.filings_testkit import (
    CH_ACCEPTED,
    CH_URL,
    HMRC_URL,
    FakeFeeCollector,
    confirmation_statement,
)


def _settings(**overrides: object) -> FilingSettings:
    values: dict[str, object] = {
        "ch_presenter_id": "PRESENTER01",
        "ch_password": "auth-code",
        "ch_test_url": CH_URL,
        "hmrc_test_url": HMRC_URL,
        "max_retries": 0,
    }
    values.update(overrides)
    return FilingSettings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_services_bind_each_gateway_to_its_endpoint() -> None:
    services = build_filing_services(fee_collector=FakeFeeCollector(), settings=_settings())
    try:
        assert services.companies_house_client.endpoint.kind is GatewayKind.COMPANIES_HOUSE
        assert services.companies_house_client.endpoint.url == CH_URL
        assert services.hmrc_client.endpoint.kind is GatewayKind.HMRC
        assert services.hmrc_client.endpoint.url == HMRC_URL
    finally:
        await services.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_wired_confirmation_statement_charges_configured_fee() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(200, text=CH_ACCEPTED))
    fees = FakeFeeCollector()

    async with httpx.AsyncClient() as http:
        services = build_filing_services(
            fee_collector=fees,
            settings=_settings(cs01_fee=Decimal("50.00")),
            http=http,
        )
        result = await services.confirmation_statement.execute(
            SubmitConfirmationStatementRequest(confirmation_statement())
        )
        await services.aclose()
        assert not http.is_closed

    assert route.call_count == 1
    assert result.outcome is SubmissionOutcome.ACCEPTED
    assert fees.charges[0]["amount"] == Decimal("50.00")
