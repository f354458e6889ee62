# src/statutory_filings/application/use_cases/filings/submit_confirmation_statement.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Use case: Submit a confirmation statement (CS01) to Companies House.

Scope:
    * Validate the statement particulars; failures return ``INVALID``
      without touching the network or the fee collector.
    * Charge the statutory filing fee, keyed by the transaction id so the
      charge is idempotent for the attempt.
    * Build the CHMD5-authenticated envelope, submit it, and classify the
      response.

Notes:
    * A declined fee yields an ``OPERATIONAL_FAILURE`` result with a
      ``PAYMENT`` error and no further steps.
    * Once charged, the receipt is carried in every result; a result that is
      not accepted reports ``charged_but_unsubmitted`` so the caller can
      reconcile or refund.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from statutory_filings.adapters.generators.confirmation_statement import (
    CS01_TRANSACTION_PREFIX,
    generate_confirmation_statement_body,
    validate_confirmation_statement,
)
from statutory_filings.adapters.govtalk.auth import Authenticator
from statutory_filings.application.use_cases.filings.pipeline import (
    SubmissionPipeline,
    failure_result,
    invalid_result,
)
from statutory_filings.config.settings import CS01_FEE
from statutory_filings.domain.entities.confirmation_statement import ConfirmationStatementData
from statutory_filings.domain.entities.envelope import FilingRequest, new_transaction_id
from statutory_filings.domain.entities.submission import SubmissionResult
from statutory_filings.domain.enums.filing import MessageClass
from statutory_filings.domain.exceptions.base import FilingError
from statutory_filings.domain.interfaces.gateways.fee_collector import FeeCollector
from statutory_filings.domain.interfaces.gateways.filing_transport import FilingTransport
from statutory_filings.domain.value_objects.cancellation import CancellationToken

logger = logging.getLogger(__name__)

FILING_TYPE = "cs01"


@dataclass(frozen=True)
class SubmitConfirmationStatementRequest:
    """Request parameters for a confirmation statement submission."""

    data: ConfirmationStatementData


class SubmitConfirmationStatementUseCase:
    """Validate, charge for, and submit a confirmation statement.

    Args:
        authenticator: Companies House hash-based authenticator.
        transport: Filing transport bound to the Companies House gateway.
        fee_collector: Collector charged before the envelope is built.
        fee: Statutory filing fee.

    Raises:
        Exception: Only programming errors propagate; a declined fee is
            returned as an operational failure.
    """

    def __init__(
        self,
        *,
        authenticator: Authenticator,
        transport: FilingTransport,
        fee_collector: FeeCollector,
        fee: Decimal = CS01_FEE,
    ) -> None:
        self._pipeline = SubmissionPipeline(
            filing_type=FILING_TYPE,
            authenticator=authenticator,
            transport=transport,
        )
        self._fees = fee_collector
        self._fee = fee

    async def execute(
        self,
        req: SubmitConfirmationStatementRequest,
        *,
        cancellation: CancellationToken | None = None,
    ) -> SubmissionResult:
        """Execute the submission.

        Returns:
            The structured result; only unexpected programming errors raise.
        """
        data = req.data
        transaction_id = new_transaction_id(CS01_TRANSACTION_PREFIX)
        logger.info(
            "filings.cs01.submit.start",
            extra={"transaction_id": transaction_id, "company_number": data.company_number},
        )

        errors = validate_confirmation_statement(data)
        if errors:
            return invalid_result(filing_type=FILING_TYPE, transaction_id=transaction_id, errors=errors)

        try:
            if cancellation is not None:
                cancellation.raise_if_cancelled("payment")
            receipt = await self._fees.charge(
                company_number=data.company_number,
                amount=self._fee,
                description=f"Confirmation statement filing fee for {data.company_number}",
                idempotency_key=transaction_id,
            )
        except FilingError as exc:
            return failure_result(exc, filing_type=FILING_TYPE, transaction_id=transaction_id)

        logger.info(
            "filings.cs01.fee.charged",
            extra={
                "transaction_id": transaction_id,
                "fee_reference": receipt.reference,
                "amount": str(receipt.amount),
            },
        )

        def _build() -> FilingRequest:
            return FilingRequest(
                message_class=MessageClass.CONFIRMATION_STATEMENT.value,
                transaction_id=transaction_id,
                body_xml=generate_confirmation_statement_body(data),
                keys=(("CompanyNumber", data.company_number),),
            )

        return await self._pipeline.run(
            transaction_id=transaction_id,
            build_request=_build,
            cancellation=cancellation,
            fee_receipt=receipt,
        )


__all__ = [
    "SubmitConfirmationStatementRequest",
    "SubmitConfirmationStatementUseCase",
]
