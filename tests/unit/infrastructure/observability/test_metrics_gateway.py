# tests/unit/infrastructure/observability/test_metrics_gateway.py
from __future__ import annotations

import httpx
import pytest
import respx
from prometheus_client import REGISTRY

from statutory_filings.application.use_cases.filings.pipeline import record_outcome
from statutory_filings.config.settings import GatewayEndpoint, TransportConfig
from statutory_filings.domain.enums.filing import GatewayKind, SubmissionOutcome
from statutory_filings.infrastructure.external_apis.govtalk.client import GovTalkClient
from statutory_filings.infrastructure.observability.metrics_gateway import (
    get_gateway_retries_total,
    get_submissions_total,
)
from tests.fixtures.filings_testkit import CH_ACCEPTED, CH_URL, RecordingSleep


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_accessors_are_singletons() -> None:
    assert get_submissions_total() is get_submissions_total()
    assert get_gateway_retries_total() is get_gateway_retries_total()


def test_record_outcome_counts_by_filing_type_and_outcome() -> None:
    labels = {"filing_type": "ct600", "outcome": "invalid"}
    before = _sample("filing_submissions_total", labels)

    record_outcome("ct600", SubmissionOutcome.INVALID)

    assert _sample("filing_submissions_total", labels) == before + 1


@pytest.mark.asyncio
@respx.mock
async def test_retries_and_statuses_are_counted() -> None:
    respx.post(CH_URL).mock(
        side_effect=[httpx.Response(502, text="bad gateway"), httpx.Response(200, text=CH_ACCEPTED)]
    )
    retry_labels = {"gateway": "companies_house", "reason": "RetryableTransportError"}
    status_labels = {"gateway": "companies_house", "status": "502"}
    retries_before = _sample("filing_gateway_retries_total", retry_labels)
    status_before = _sample("filing_gateway_http_status_total", status_labels)

    client = GovTalkClient(
        GatewayEndpoint(GatewayKind.COMPANIES_HOUSE, CH_URL),
        TransportConfig(max_retries=1),
        sleep=RecordingSleep(),
    )
    try:
        await client.submit("<GovTalkMessage/>")
    finally:
        await client.aclose()

    assert _sample("filing_gateway_retries_total", retry_labels) == retries_before + 1
    assert _sample("filing_gateway_http_status_total", status_labels) == status_before + 1
