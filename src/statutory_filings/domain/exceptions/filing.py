# src/statutory_filings/domain/exceptions/filing.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing pipeline exceptions.

Purpose:
    Provide the error taxonomy of the submission pipeline: static validation,
    configuration, canonicalization/tagging, transport (retryable vs
    terminal), payment preconditions and cancellation.

Layer:
    domain

Notes:
    - Gateway rejections are *not* exceptions. A well-formed rejection is a
      normal outcome reported through the submission result.
    - Infrastructure translates httpx and XML library errors into these types;
      third-party exception types never cross a module boundary.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from statutory_filings.domain.enums.filing import ErrorKind
from statutory_filings.domain.exceptions.base import FilingError


class FilingValidationError(FilingError):
    """Raised when filing data fails a required-field or cross-field rule."""

    code = "VALIDATION_FAILED"
    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the validation error.

        Args:
            message: Summary message.
            errors: Individual rule violations, in evaluation order.
            details: Optional structured diagnostic payload.
        """
        super().__init__(message, details=details)
        self.errors: list[str] = list(errors or [message])


class BalanceSheetImbalanceError(FilingValidationError):
    """Raised when net assets do not equal total equity within tolerance."""

    code = "BALANCE_SHEET_UNBALANCED"

    def __init__(
        self,
        *,
        net_assets: Decimal,
        total_equity: Decimal,
        period: str = "current",
    ) -> None:
        """Initialize the imbalance error.

        Args:
            net_assets: Total assets less total liabilities.
            total_equity: Sum of capital and reserves.
            period: Which period failed ("current" or "previous").
        """
        discrepancy = net_assets - total_equity
        message = (
            f"Balance sheet ({period}) does not balance: net assets {net_assets:,} "
            f"!= total equity {total_equity:,} (discrepancy {discrepancy:,})"
        )
        super().__init__(
            message,
            details={
                "period": period,
                "net_assets": str(net_assets),
                "total_equity": str(total_equity),
                "discrepancy": str(discrepancy),
            },
        )
        self.net_assets = net_assets
        self.total_equity = total_equity
        self.discrepancy = discrepancy
        self.period = period


class ConfigurationError(FilingError):
    """Raised when credentials or endpoints are missing or malformed."""

    code = "CONFIGURATION_INVALID"
    kind = ErrorKind.CONFIGURATION


class CanonicalizationError(FilingError):
    """Raised when an envelope cannot be canonicalized for its integrity mark."""

    code = "CANONICALIZATION_FAILED"
    kind = ErrorKind.CANONICALIZATION


class TaggingError(FilingError):
    """Raised when a tagged value references an undeclared context or unit."""

    code = "TAGGING_FAILED"
    kind = ErrorKind.INTERNAL


class DocumentBuildError(FilingError):
    """Raised when a validated filing still cannot be rendered into a request."""

    code = "DOCUMENT_BUILD_FAILED"
    kind = ErrorKind.INTERNAL


class TransportError(FilingError):
    """Base class for gateway transport failures.

    Attributes:
        status_code: HTTP status code, when a response was received.
        response_text: Raw response body, when a response was received.
    """

    code = "TRANSPORT_FAILED"
    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_text: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize a transport error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status, if any.
            response_text: Raw response body, if any.
            details: Optional structured diagnostic payload.
        """
        super().__init__(message, details=details)
        self.status_code = status_code
        self.response_text = response_text


class RetryableTransportError(TransportError):
    """Timeout, connection failure or HTTP 429/502/503."""

    code = "TRANSPORT_RETRYABLE"


class TerminalTransportError(TransportError):
    """Any other non-success status, or an unparsable response body."""

    code = "TRANSPORT_TERMINAL"


class PaymentDeclinedError(FilingError):
    """Raised when the priced precondition of a filing could not be charged."""

    code = "PAYMENT_DECLINED"
    kind = ErrorKind.PAYMENT


class SubmissionCancelledError(FilingError):
    """Raised when the caller cancels a submission between pipeline stages."""

    code = "SUBMISSION_CANCELLED"
    kind = ErrorKind.CANCELLED


__all__ = [
    "BalanceSheetImbalanceError",
    "CanonicalizationError",
    "ConfigurationError",
    "DocumentBuildError",
    "FilingValidationError",
    "PaymentDeclinedError",
    "RetryableTransportError",
    "SubmissionCancelledError",
    "TaggingError",
    "TerminalTransportError",
    "TransportError",
]
