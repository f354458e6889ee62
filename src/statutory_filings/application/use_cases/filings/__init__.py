# src/statutory_filings/application/use_cases/filings/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing orchestrators (Application Layer).

Purpose:
    The only surface external callers touch. Each orchestrator validates,
    builds, authenticates, submits and classifies one filing, returning a
    ``SubmissionResult``.

Layer:
    application/use_cases/filings
"""

from __future__ import annotations

from statutory_filings.application.use_cases.filings.submit_annual_accounts import (
    SubmitAnnualAccountsRequest,
    SubmitAnnualAccountsUseCase,
)
from statutory_filings.application.use_cases.filings.submit_confirmation_statement import (
    SubmitConfirmationStatementRequest,
    SubmitConfirmationStatementUseCase,
)
from statutory_filings.application.use_cases.filings.submit_corporation_tax_return import (
    SubmitCorporationTaxReturnRequest,
    SubmitCorporationTaxReturnUseCase,
)

__all__ = [
    "SubmitAnnualAccountsRequest",
    "SubmitAnnualAccountsUseCase",
    "SubmitConfirmationStatementRequest",
    "SubmitConfirmationStatementUseCase",
    "SubmitCorporationTaxReturnRequest",
    "SubmitCorporationTaxReturnUseCase",
]
