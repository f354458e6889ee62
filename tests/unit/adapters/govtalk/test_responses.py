# tests/unit/adapters/govtalk/test_responses.py
from __future__ import annotations

import pytest

from statutory_filings.adapters.govtalk.responses import parse_gateway_response
from statutory_filings.domain.exceptions.filing import TerminalTransportError
from tests.fixtures.filings_testkit import CH_ACCEPTED, CH_REJECTED

_NS = 'xmlns="http://www.govtalk.gov.uk/CM/envelope"'


def _message(qualifier: str, body: str = "", details: str = "") -> str:
    return (
        f"<GovTalkMessage {_NS}><Header><MessageDetails>"
        f"<Class>Accounts</Class><Qualifier>{qualifier}</Qualifier>"
        f"<CorrelationID>CORR-1</CorrelationID></MessageDetails></Header>"
        f"<GovTalkDetails><Keys/>{details}</GovTalkDetails><Body>{body}</Body></GovTalkMessage>"
    )


def test_accepted_response_with_submission_number() -> None:
    parsed = parse_gateway_response(CH_ACCEPTED)

    assert parsed.accepted is True
    assert parsed.reference == "CH-000123"
    assert parsed.matched_by == "accepted_qualifier"
    assert parsed.errors == ()


def test_error_qualifier_rejects_and_folds_error_children() -> None:
    parsed = parse_gateway_response(CH_REJECTED)

    assert parsed.accepted is False
    assert parsed.matched_by == "error_qualifier"
    assert parsed.errors == ("9999: Company number not found (at CompanyNumber)",)


def test_error_qualifier_wins_over_reference_present() -> None:
    parsed = parse_gateway_response(_message("error", body="<SubmissionNumber>S1</SubmissionNumber>"))

    assert parsed.accepted is False
    assert parsed.reference == "S1"


@pytest.mark.parametrize(
    ("body", "accepted"),
    [
        ("<Status>ACCEPTED</Status>", True),
        ("<Status>Rejected</Status><Message>Late filing</Message>", False),
        ("<StatusCode>1</StatusCode>", True),
        ("<Response>accepted</Response>", True),
    ],
)
def test_status_markers(body: str, accepted: bool) -> None:
    parsed = parse_gateway_response(_message("poll", body=body))

    assert parsed.accepted is accepted
    assert parsed.matched_by == "status_marker"


def test_rejected_status_extracts_free_text_messages() -> None:
    parsed = parse_gateway_response(_message("poll", body="<Status>failed</Status><Text>Bad data</Text>"))
    assert parsed.errors == ("Bad data",)


def test_reference_alone_implies_acceptance() -> None:
    parsed = parse_gateway_response(_message("poll", body="<ConfirmationCode>C-9</ConfirmationCode>"))

    assert parsed.accepted is True
    assert parsed.matched_by == "reference_present"
    assert parsed.reference == "C-9"


def test_correlation_id_is_a_reference_fallback_but_not_acceptance() -> None:
    parsed = parse_gateway_response(_message("poll"))

    assert parsed.accepted is False
    assert parsed.matched_by is None
    assert parsed.reference == "CORR-1"


def test_duplicate_errors_are_dropped_in_document_order() -> None:
    details = (
        "<GovTalkErrors><Error><Text>First</Text></Error>"
        "<Error><Text>Second</Text></Error><Error><Text>First</Text></Error></GovTalkErrors>"
    )
    parsed = parse_gateway_response(_message("error", details=details))
    assert parsed.errors == ("First", "Second")


@pytest.mark.parametrize(
    "text",
    [
        "<not-closed>",
        '<?xml version="1.0"?><!DOCTYPE x [<!ENTITY e "boom">]><x>&e;</x>',
    ],
)
def test_malformed_or_hostile_xml_is_terminal(text: str) -> None:
    with pytest.raises(TerminalTransportError) as exc_info:
        parse_gateway_response(text)
    assert exc_info.value.response_text == text
