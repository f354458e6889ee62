# src/statutory_filings/application/use_cases/filings/submit_corporation_tax_return.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Use case: Submit a corporation tax return (CT600) to HMRC.

Scope:
    * Validate the return figures and identifiers.
    * Render the ``IRbody`` and hand it to the mark-based authenticator,
      which builds the ``IRenvelope`` and computes the IRmark in two passes.
    * Submit and classify the response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from statutory_filings.adapters.generators.corporation_tax import (
    CT600_TRANSACTION_PREFIX,
    generate_corporation_tax_body,
    validate_corporation_tax_return,
)
from statutory_filings.adapters.govtalk.auth import Authenticator
from statutory_filings.application.use_cases.filings.pipeline import SubmissionPipeline, invalid_result
from statutory_filings.domain.entities.corporation_tax import CorporationTaxReturnData
from statutory_filings.domain.entities.envelope import FilingRequest, new_transaction_id
from statutory_filings.domain.entities.submission import SubmissionResult
from statutory_filings.domain.enums.filing import MessageClass
from statutory_filings.domain.interfaces.gateways.filing_transport import FilingTransport
from statutory_filings.domain.value_objects.cancellation import CancellationToken

logger = logging.getLogger(__name__)

FILING_TYPE = "ct600"


@dataclass(frozen=True)
class SubmitCorporationTaxReturnRequest:
    """Request parameters for a CT600 submission."""

    data: CorporationTaxReturnData


class SubmitCorporationTaxReturnUseCase:
    """Validate, mark and submit a corporation tax return.

    Args:
        authenticator: HMRC mark-based authenticator.
        transport: Filing transport bound to the HMRC gateway.

    Raises:
        Exception: Only programming errors propagate.
    """

    def __init__(self, *, authenticator: Authenticator, transport: FilingTransport) -> None:
        self._pipeline = SubmissionPipeline(
            filing_type=FILING_TYPE,
            authenticator=authenticator,
            transport=transport,
        )

    async def execute(
        self,
        req: SubmitCorporationTaxReturnRequest,
        *,
        cancellation: CancellationToken | None = None,
    ) -> SubmissionResult:
        """Execute the submission."""
        data = req.data
        transaction_id = new_transaction_id(CT600_TRANSACTION_PREFIX)
        logger.info(
            "filings.ct600.submit.start",
            extra={
                "transaction_id": transaction_id,
                "company_number": data.company_number,
                "period_end": data.period_end.isoformat(),
            },
        )

        errors = validate_corporation_tax_return(data)
        if errors:
            return invalid_result(filing_type=FILING_TYPE, transaction_id=transaction_id, errors=errors)

        def _build() -> FilingRequest:
            return FilingRequest(
                message_class=MessageClass.CORPORATION_TAX.value,
                transaction_id=transaction_id,
                body_xml=generate_corporation_tax_body(data),
                keys=(("UTR", data.utr),),
                period_end=data.period_end.isoformat(),
            )

        return await self._pipeline.run(
            transaction_id=transaction_id,
            build_request=_build,
            cancellation=cancellation,
        )


__all__ = ["SubmitCorporationTaxReturnRequest", "SubmitCorporationTaxReturnUseCase"]
