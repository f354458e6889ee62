# tests/unit/infrastructure/external_apis/govtalk/test_govtalk_client.py
from __future__ import annotations

import httpx
import pytest
import respx

from statutory_filings.config.settings import GatewayEndpoint, TransportConfig
from statutory_filings.domain.enums.filing import GatewayKind
from statutory_filings.domain.exceptions.filing import (
    SubmissionCancelledError,
    TerminalTransportError,
)
from statutory_filings.domain.value_objects.cancellation import CancellationToken
from statutory_filings.infrastructure.external_apis.govtalk.client import GovTalkClient
from statutory_filings.infrastructure.logging.logger import (
    clear_request_context,
    set_request_context,
)
from tests.fixtures.filings_testkit import CH_ACCEPTED, CH_URL, RecordingSleep

ENDPOINT = GatewayEndpoint(GatewayKind.COMPANIES_HOUSE, CH_URL)
CONFIG = TransportConfig(timeout_s=5.0, max_retries=3, backoff_base_s=1.0, backoff_cap_s=16.0)
ENVELOPE = "<GovTalkMessage/>"


def _client(sleep: RecordingSleep, http: httpx.AsyncClient) -> GovTalkClient:
    return GovTalkClient(ENDPOINT, CONFIG, http=http, sleep=sleep)


@pytest.mark.asyncio
@respx.mock
async def test_success_returns_body_and_single_attempt() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(200, text=CH_ACCEPTED))
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        response = await _client(sleep, http).submit(ENVELOPE)

    assert route.call_count == 1
    assert response.status_code == 200
    assert response.attempts == 1
    assert response.text == CH_ACCEPTED
    request = route.calls.last.request
    assert request.content == ENVELOPE.encode("utf-8")
    assert request.headers["Content-Type"] == "text/xml; charset=UTF-8"
    assert sleep.delays == []


@pytest.mark.asyncio
@respx.mock
async def test_rate_limited_then_success_backs_off_exponentially() -> None:
    route = respx.post(CH_URL).mock(
        side_effect=[
            httpx.Response(429, text="slow down"),
            httpx.Response(429, text="slow down"),
            httpx.Response(429, text="slow down"),
            httpx.Response(200, text=CH_ACCEPTED),
        ]
    )
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        response = await _client(sleep, http).submit(ENVELOPE)

    assert route.call_count == 4
    assert response.attempts == 4
    assert sleep.delays == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
@respx.mock
async def test_timeouts_are_retried() -> None:
    route = respx.post(CH_URL).mock(
        side_effect=[
            httpx.ConnectTimeout("timed out"),
            httpx.ReadTimeout("timed out"),
            httpx.Response(200, text=CH_ACCEPTED),
        ]
    )
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        response = await _client(sleep, http).submit(ENVELOPE)

    assert route.call_count == 3
    assert response.attempts == 3
    assert sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
@respx.mock
async def test_client_error_is_terminal_without_retry() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(404, text="not here"))
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        with pytest.raises(TerminalTransportError) as excinfo:
            await _client(sleep, http).submit(ENVELOPE)

    assert route.call_count == 1
    assert excinfo.value.status_code == 404
    assert excinfo.value.response_text == "not here"
    assert sleep.delays == []


@pytest.mark.asyncio
@respx.mock
async def test_exhausted_budget_is_terminal() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(503, text="down"))
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        with pytest.raises(TerminalTransportError) as excinfo:
            await _client(sleep, http).submit(ENVELOPE)

    assert route.call_count == 4
    assert excinfo.value.status_code == 503
    assert excinfo.value.details["attempts"] == 4
    assert excinfo.value.details["retries_exhausted"] is True
    assert sleep.delays == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
@respx.mock
async def test_malformed_success_body_is_terminal() -> None:
    respx.post(CH_URL).mock(return_value=httpx.Response(200, text="<GovTalkMessage><Header>"))
    async with httpx.AsyncClient() as http:
        with pytest.raises(TerminalTransportError):
            await _client(RecordingSleep(), http).submit(ENVELOPE)


@pytest.mark.asyncio
@respx.mock
async def test_cancellation_stops_before_backoff() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(502, text="bad gateway"))
    token = CancellationToken()
    token.cancel("shutdown")
    sleep = RecordingSleep()
    async with httpx.AsyncClient() as http:
        with pytest.raises(SubmissionCancelledError):
            await _client(sleep, http).submit(ENVELOPE, cancellation=token)

    assert route.call_count == 1
    assert sleep.delays == []


@pytest.mark.asyncio
@respx.mock
async def test_correlation_headers_are_propagated() -> None:
    route = respx.post(CH_URL).mock(return_value=httpx.Response(200, text=CH_ACCEPTED))
    set_request_context(request_id="req-123", trace_id="trace-abc")
    try:
        async with httpx.AsyncClient() as http:
            await _client(RecordingSleep(), http).submit(ENVELOPE)
    finally:
        clear_request_context()

    headers = route.calls.last.request.headers
    assert headers["X-Request-ID"] == "req-123"
    assert headers["x-trace-id"] == "trace-abc"


@pytest.mark.asyncio
async def test_aclose_closes_only_an_owned_client() -> None:
    owned = GovTalkClient(ENDPOINT, CONFIG)
    await owned.aclose()
    assert owned._client.is_closed  # noqa: SLF001

    async with httpx.AsyncClient() as http:
        shared = GovTalkClient(ENDPOINT, CONFIG, http=http)
        await shared.aclose()
        assert not http.is_closed
