# src/statutory_filings/application/use_cases/filings/submit_annual_accounts.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Use case: Submit annual accounts to Companies House.

Scope:
    * Validate the filing context and statement set, including the balance
      sheet identity for every period.
    * Render the iXBRL document, package it, and wrap it in an
      ``AccountsData`` body.
    * Build the CHMD5-authenticated envelope, submit it, and classify the
      response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from statutory_filings.adapters.generators.annual_accounts import (
    ACCOUNTS_TRANSACTION_PREFIX,
    generate_annual_accounts_body,
    validate_annual_accounts,
)
from statutory_filings.adapters.govtalk.auth import Authenticator
from statutory_filings.adapters.ixbrl.document import TaggedDocumentGenerator
from statutory_filings.adapters.ixbrl.packaging import package_for_submission
from statutory_filings.application.use_cases.filings.pipeline import SubmissionPipeline, invalid_result
from statutory_filings.domain.entities.envelope import FilingRequest, new_transaction_id
from statutory_filings.domain.entities.filing_context import FilingContext
from statutory_filings.domain.entities.financial_statements import FinancialStatementSet
from statutory_filings.domain.entities.submission import SubmissionResult
from statutory_filings.domain.enums.filing import MessageClass
from statutory_filings.domain.interfaces.gateways.filing_transport import FilingTransport
from statutory_filings.domain.value_objects.cancellation import CancellationToken

logger = logging.getLogger(__name__)

FILING_TYPE = "accounts"


@dataclass(frozen=True)
class SubmitAnnualAccountsRequest:
    """Request parameters for an annual accounts submission."""

    context: FilingContext
    statements: FinancialStatementSet


class SubmitAnnualAccountsUseCase:
    """Validate, tag, package and submit annual accounts.

    Args:
        authenticator: Companies House hash-based authenticator.
        transport: Filing transport bound to the Companies House gateway.
        generator: Optional iXBRL document generator override.

    Raises:
        Exception: Only programming errors propagate; filing failures are
            returned as structured results.
    """

    def __init__(
        self,
        *,
        authenticator: Authenticator,
        transport: FilingTransport,
        generator: TaggedDocumentGenerator | None = None,
    ) -> None:
        self._pipeline = SubmissionPipeline(
            filing_type=FILING_TYPE,
            authenticator=authenticator,
            transport=transport,
        )
        self._generator = generator or TaggedDocumentGenerator()

    async def execute(
        self,
        req: SubmitAnnualAccountsRequest,
        *,
        cancellation: CancellationToken | None = None,
    ) -> SubmissionResult:
        """Execute the submission."""
        context = req.context
        transaction_id = new_transaction_id(ACCOUNTS_TRANSACTION_PREFIX)
        logger.info(
            "filings.accounts.submit.start",
            extra={
                "transaction_id": transaction_id,
                "company_number": context.company_number,
                "entity_size": context.entity_size.value,
                "period_end": context.period_end.isoformat(),
            },
        )

        errors = validate_annual_accounts(context, req.statements)
        if errors:
            return invalid_result(filing_type=FILING_TYPE, transaction_id=transaction_id, errors=errors)

        def _build() -> FilingRequest:
            document = self._generator.generate(context, req.statements)
            package = package_for_submission([document])
            logger.info(
                "filings.accounts.package.built",
                extra={
                    "transaction_id": transaction_id,
                    "filename": document.filename,
                    "document_bytes": document.size,
                    "package_chars": len(package),
                },
            )
            return FilingRequest(
                message_class=MessageClass.ACCOUNTS.value,
                transaction_id=transaction_id,
                body_xml=generate_annual_accounts_body(context, package),
                keys=(("CompanyNumber", context.company_number),),
            )

        return await self._pipeline.run(
            transaction_id=transaction_id,
            build_request=_build,
            cancellation=cancellation,
        )


__all__ = ["SubmitAnnualAccountsRequest", "SubmitAnnualAccountsUseCase"]
