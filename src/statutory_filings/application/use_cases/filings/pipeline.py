# src/statutory_filings/application/use_cases/filings/pipeline.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Shared submission pipeline for filing use cases.

Scope:
    * Given a validated filing and its body builder:
        - Build the authenticated envelope (hash- or mark-based).
        - Submit it through the filing transport.
        - Classify the gateway response into accepted / rejected.
        - Return a ``SubmissionResult`` carrying the exact outbound envelope
          and raw inbound text regardless of outcome.

Notes:
    * Every ``FilingError`` is converted into a structured ``SubmissionError``.
      Any other error raised while building the request is wrapped in
      ``DocumentBuildError`` first; errors from later stages propagate.
    * Cancellation is checked between stages; an in-flight request is allowed
      to finish or time out.
    * A fee receipt taken before this pipeline runs is carried in every
      result, so an unaccepted result reports ``charged_but_unsubmitted``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextlib import suppress

from statutory_filings.adapters.govtalk.auth import Authenticator
from statutory_filings.adapters.govtalk.responses import parse_gateway_response
from statutory_filings.domain.entities.envelope import FilingRequest
from statutory_filings.domain.entities.submission import (
    FeeReceipt,
    SubmissionError,
    SubmissionResult,
)
from statutory_filings.domain.enums.filing import ErrorKind, SubmissionOutcome
from statutory_filings.domain.exceptions.base import FilingError
from statutory_filings.domain.exceptions.filing import (
    DocumentBuildError,
    FilingValidationError,
    SubmissionCancelledError,
    TransportError,
)
from statutory_filings.domain.interfaces.gateways.filing_transport import FilingTransport
from statutory_filings.domain.value_objects.cancellation import CancellationToken
from statutory_filings.infrastructure.observability.metrics_gateway import get_submissions_total

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_MESSAGE = "The gateway did not accept the submission"


def record_outcome(filing_type: str, outcome: SubmissionOutcome) -> None:
    with suppress(Exception):
        get_submissions_total().labels(filing_type=filing_type, outcome=outcome.value).inc()


def invalid_result(
    *,
    filing_type: str,
    transaction_id: str,
    errors: Sequence[str],
) -> SubmissionResult:
    """Return the ``INVALID`` result for static validation failures."""
    logger.info(
        f"filings.{filing_type}.submit.invalid",
        extra={"transaction_id": transaction_id, "errors": list(errors)},
    )
    record_outcome(filing_type, SubmissionOutcome.INVALID)
    return SubmissionResult(
        success=False,
        outcome=SubmissionOutcome.INVALID,
        submission_id=transaction_id,
        errors=tuple(SubmissionError(kind=ErrorKind.VALIDATION, message=msg) for msg in errors),
    )


def failure_result(
    exc: FilingError,
    *,
    filing_type: str,
    transaction_id: str,
    request_xml: str | None = None,
    response_text: str | None = None,
    fee_receipt: FeeReceipt | None = None,
) -> SubmissionResult:
    """Convert a pipeline exception into a failed result."""
    if isinstance(exc, SubmissionCancelledError):
        outcome = SubmissionOutcome.CANCELLED
    elif isinstance(exc, FilingValidationError):
        outcome = SubmissionOutcome.INVALID
    else:
        outcome = SubmissionOutcome.OPERATIONAL_FAILURE

    if isinstance(exc, FilingValidationError):
        errors = tuple(
            SubmissionError(kind=exc.kind, message=msg, code=exc.code) for msg in exc.errors
        )
    else:
        errors = (SubmissionError.from_exception(exc),)

    logger.warning(
        f"filings.{filing_type}.submit.failed",
        extra={
            "transaction_id": transaction_id,
            "outcome": outcome.value,
            "error_code": exc.code,
            "error": exc.message,
            "charged": fee_receipt is not None,
        },
    )
    record_outcome(filing_type, outcome)
    return SubmissionResult(
        success=False,
        outcome=outcome,
        submission_id=transaction_id,
        errors=errors,
        request_xml=request_xml,
        response_text=response_text,
        fee_receipt=fee_receipt,
    )


class SubmissionPipeline:
    """Build, authenticate, transmit and classify one filing."""

    def __init__(
        self,
        *,
        filing_type: str,
        authenticator: Authenticator,
        transport: FilingTransport,
    ) -> None:
        self._filing_type = filing_type
        self._authenticator = authenticator
        self._transport = transport

    @property
    def filing_type(self) -> str:
        return self._filing_type

    def _build(self, transaction_id: str, build_request: Callable[[], FilingRequest]) -> str:
        try:
            return self._authenticator.build_authenticated_request(build_request())
        except FilingError:
            raise
        except Exception as exc:
            logger.exception(
                f"filings.{self._filing_type}.build.error",
                extra={"transaction_id": transaction_id, "error_type": type(exc).__name__},
            )
            raise DocumentBuildError(
                "The filing could not be rendered into a gateway request",
                details={"error_type": type(exc).__name__, "error": str(exc)},
            ) from exc

    async def run(
        self,
        *,
        transaction_id: str,
        build_request: Callable[[], FilingRequest],
        cancellation: CancellationToken | None = None,
        fee_receipt: FeeReceipt | None = None,
    ) -> SubmissionResult:
        """Run the build/submit/parse stages for one attempt.

        Args:
            transaction_id: Id of this attempt; echoed by the gateway.
            build_request: Produces the filing request (body generation may
                be expensive, so it runs after the cancellation check).
            cancellation: Optional caller-owned cancellation token.
            fee_receipt: Receipt of a fee charged before this stage.
        """
        request_xml: str | None = None
        response_text: str | None = None
        try:
            if cancellation is not None:
                cancellation.raise_if_cancelled("build")
            request_xml = self._build(transaction_id, build_request)

            if cancellation is not None:
                cancellation.raise_if_cancelled("submit")
            response = await self._transport.submit(request_xml, cancellation=cancellation)
            response_text = response.text
            parsed = parse_gateway_response(response.text)
        except TransportError as exc:
            return failure_result(
                exc,
                filing_type=self._filing_type,
                transaction_id=transaction_id,
                request_xml=request_xml,
                response_text=exc.response_text or response_text,
                fee_receipt=fee_receipt,
            )
        except FilingError as exc:
            return failure_result(
                exc,
                filing_type=self._filing_type,
                transaction_id=transaction_id,
                request_xml=request_xml,
                response_text=response_text,
                fee_receipt=fee_receipt,
            )

        if parsed.accepted:
            logger.info(
                f"filings.{self._filing_type}.submit.success",
                extra={
                    "transaction_id": transaction_id,
                    "reference": parsed.reference,
                    "matched_by": parsed.matched_by,
                    "attempts": response.attempts,
                },
            )
            record_outcome(self._filing_type, SubmissionOutcome.ACCEPTED)
            return SubmissionResult(
                success=True,
                outcome=SubmissionOutcome.ACCEPTED,
                submission_id=transaction_id,
                reference=parsed.reference,
                request_xml=request_xml,
                response_text=response_text,
                fee_receipt=fee_receipt,
            )

        messages = list(parsed.errors) or [DEFAULT_REJECTION_MESSAGE]
        logger.warning(
            f"filings.{self._filing_type}.submit.rejected",
            extra={
                "transaction_id": transaction_id,
                "matched_by": parsed.matched_by,
                "errors": messages,
                "charged": fee_receipt is not None,
            },
        )
        record_outcome(self._filing_type, SubmissionOutcome.REJECTED)
        return SubmissionResult(
            success=False,
            outcome=SubmissionOutcome.REJECTED,
            submission_id=transaction_id,
            reference=parsed.reference,
            errors=tuple(
                SubmissionError(kind=ErrorKind.GATEWAY_REJECTION, message=msg) for msg in messages
            ),
            request_xml=request_xml,
            response_text=response_text,
            fee_receipt=fee_receipt,
        )


__all__ = ["SubmissionPipeline", "failure_result", "invalid_result", "record_outcome"]
