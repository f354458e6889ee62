# tests/unit/application/use_cases/test_submit_confirmation_statement.py
from __future__ import annotations

from decimal import Decimal

import pytest
from lxml import etree

from statutory_filings.adapters.govtalk.auth import CompaniesHouseAuthenticator
from statutory_filings.adapters.govtalk.envelope import GOVTALK_NS
from statutory_filings.application.use_cases.filings import submit_confirmation_statement as cs01_module
from statutory_filings.application.use_cases.filings.submit_confirmation_statement import (
    SubmitConfirmationStatementRequest,
    SubmitConfirmationStatementUseCase,
)
from statutory_filings.config.settings import CompaniesHouseCredentials
from statutory_filings.domain.entities.confirmation_statement import Shareholder
from statutory_filings.domain.entities.submission import GatewayResponse
from statutory_filings.domain.enums.filing import ErrorKind, SubmissionOutcome
from statutory_filings.domain.exceptions.filing import DocumentBuildError, TerminalTransportError
from statutory_filings.domain.value_objects.cancellation import CancellationToken
from tests.fixtures.filings_testkit import (
    CH_ACCEPTED,
    CH_REJECTED,
    FakeFeeCollector,
    FakeTransport,
    confirmation_statement,
)

NS = {"g": GOVTALK_NS}


def _use_case(
    credentials: CompaniesHouseCredentials,
    transport: FakeTransport,
    fees: FakeFeeCollector,
) -> SubmitConfirmationStatementUseCase:
    return SubmitConfirmationStatementUseCase(
        authenticator=CompaniesHouseAuthenticator(credentials),
        transport=transport,
        fee_collector=fees,
    )


@pytest.mark.asyncio
async def test_accepted_statement_carries_reference_and_receipt(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport(GatewayResponse(200, CH_ACCEPTED))
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(SubmitConfirmationStatementRequest(confirmation_statement()))

    assert result.success is True
    assert result.outcome is SubmissionOutcome.ACCEPTED
    assert result.reference == "CH-000123"
    assert result.fee_receipt is not None
    assert result.fee_receipt.amount == Decimal("34.00")
    assert result.charged_but_unsubmitted is False
    assert result.request_xml == transport.envelopes[0]
    assert result.response_text == CH_ACCEPTED

    charge = fee_collector.charges[0]
    assert charge["idempotency_key"] == result.submission_id
    assert charge["company_number"] == "12345678"

    root = etree.fromstring(result.request_xml.encode("utf-8"))
    assert root.findtext(".//g:MessageDetails/g:Class", namespaces=NS) == "ConfirmationStatement"
    assert root.findtext(".//g:MessageDetails/g:TransactionID", namespaces=NS) == result.submission_id
    assert root.find(".//g:Body/{*}ConfirmationStatement", NS) is not None


@pytest.mark.asyncio
async def test_invalid_statement_never_charges_or_submits(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport()
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(
        SubmitConfirmationStatementRequest(confirmation_statement(shareholders=()))
    )

    assert result.outcome is SubmissionOutcome.INVALID
    assert result.error_messages == ["At least one shareholder is required"]
    assert result.errors[0].kind is ErrorKind.VALIDATION
    assert fee_collector.charges == []
    assert transport.envelopes == []
    assert result.request_xml is None


@pytest.mark.asyncio
async def test_declined_payment_is_operational_failure(
    ch_credentials: CompaniesHouseCredentials,
) -> None:
    transport = FakeTransport()
    uc = _use_case(ch_credentials, transport, FakeFeeCollector(decline=True))

    result = await uc.execute(SubmitConfirmationStatementRequest(confirmation_statement()))

    assert result.outcome is SubmissionOutcome.OPERATIONAL_FAILURE
    assert result.errors[0].kind is ErrorKind.PAYMENT
    assert result.is_operational_failure is True
    assert result.fee_receipt is None
    assert result.charged_but_unsubmitted is False
    assert transport.envelopes == []


@pytest.mark.asyncio
async def test_rejection_after_charge_reports_charged_but_unsubmitted(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport(GatewayResponse(200, CH_REJECTED))
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(SubmitConfirmationStatementRequest(confirmation_statement()))

    assert result.outcome is SubmissionOutcome.REJECTED
    assert result.error_messages == ["9999: Company number not found (at CompanyNumber)"]
    assert result.errors[0].kind is ErrorKind.GATEWAY_REJECTION
    assert result.is_operational_failure is False
    assert result.charged_but_unsubmitted is True
    assert len(fee_collector.charges) == 1


@pytest.mark.asyncio
async def test_control_characters_are_rejected_before_charging(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport()
    uc = _use_case(ch_credentials, transport, fee_collector)
    data = confirmation_statement(shareholders=(Shareholder("Jane\x00Smith", 100),))

    result = await uc.execute(SubmitConfirmationStatementRequest(data))

    assert result.outcome is SubmissionOutcome.INVALID
    assert result.error_messages == [
        "confirmation_statement.shareholders[0].name contains characters not allowed in XML"
    ]
    assert fee_collector.charges == []
    assert transport.envelopes == []


@pytest.mark.asyncio
async def test_render_failure_after_charge_returns_the_receipt(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _broken_body(data: object) -> str:
        raise ValueError("All strings must be XML compatible")

    monkeypatch.setattr(cs01_module, "generate_confirmation_statement_body", _broken_body)
    transport = FakeTransport()
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(SubmitConfirmationStatementRequest(confirmation_statement()))

    assert result.outcome is SubmissionOutcome.OPERATIONAL_FAILURE
    assert result.errors[0].code == DocumentBuildError.code
    assert result.charged_but_unsubmitted is True
    assert result.fee_receipt is not None
    assert len(fee_collector.charges) == 1
    assert transport.envelopes == []


@pytest.mark.asyncio
async def test_transport_failure_keeps_envelope_and_receipt(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport(
        TerminalTransportError("Gateway returned HTTP 500", status_code=500, response_text="boom")
    )
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(SubmitConfirmationStatementRequest(confirmation_statement()))

    assert result.outcome is SubmissionOutcome.OPERATIONAL_FAILURE
    assert result.errors[0].kind is ErrorKind.TRANSPORT
    assert result.request_xml == transport.envelopes[0]
    assert result.response_text == "boom"
    assert result.charged_but_unsubmitted is True


@pytest.mark.asyncio
async def test_cancelled_before_payment(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport()
    token = CancellationToken()
    token.cancel("operator abort")
    uc = _use_case(ch_credentials, transport, fee_collector)

    result = await uc.execute(
        SubmitConfirmationStatementRequest(confirmation_statement()),
        cancellation=token,
    )

    assert result.outcome is SubmissionOutcome.CANCELLED
    assert result.errors[0].kind is ErrorKind.CANCELLED
    assert fee_collector.charges == []
    assert transport.envelopes == []


@pytest.mark.asyncio
async def test_each_execution_uses_a_fresh_transaction_id(
    ch_credentials: CompaniesHouseCredentials,
    fee_collector: FakeFeeCollector,
) -> None:
    transport = FakeTransport(GatewayResponse(200, CH_ACCEPTED), GatewayResponse(200, CH_ACCEPTED))
    uc = _use_case(ch_credentials, transport, fee_collector)
    req = SubmitConfirmationStatementRequest(confirmation_statement())

    first = await uc.execute(req)
    second = await uc.execute(req)

    assert first.submission_id != second.submission_id
    assert [c["idempotency_key"] for c in fee_collector.charges] == [
        first.submission_id,
        second.submission_id,
    ]
