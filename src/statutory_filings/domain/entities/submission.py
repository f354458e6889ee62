# src/statutory_filings/domain/entities/submission.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Submission outcome entities.

Purpose:
    Carry the raw gateway response, its parsed interpretation and the
    structured result of one orchestrated submission attempt.

Layer:
    domain

Notes:
    - ``SubmissionResult`` retains the exact outbound envelope and the raw
      inbound text regardless of outcome; persisting them is the caller's
      responsibility.
    - A result with a fee receipt that was not accepted is
      ``charged_but_unsubmitted`` so callers can reconcile or refund.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from statutory_filings.domain.enums.filing import ErrorKind, SubmissionOutcome
from statutory_filings.domain.exceptions.base import FilingError
from statutory_filings.domain.value_objects.money import coerce_decimal_fields


@dataclass(frozen=True)
class GatewayResponse:
    """Raw HTTP response from a gateway."""

    status_code: int
    text: str
    attempts: int = 1


@dataclass(frozen=True)
class ParsedGatewayResponse:
    """Interpretation of a gateway response body."""

    accepted: bool
    reference: str | None = None
    errors: Sequence[str] = ()
    matched_by: str | None = None


@dataclass(frozen=True)
class FeeReceipt:
    """Proof that a priced precondition was charged."""

    reference: str
    amount: Decimal
    remaining_balance: Decimal | None = None

    def __post_init__(self) -> None:
        coerce_decimal_fields(self)


@dataclass(frozen=True)
class SubmissionError:
    """One structured error reported at the orchestrator boundary."""

    kind: ErrorKind
    message: str
    code: str | None = None
    location: str | None = None

    @classmethod
    def from_exception(cls, exc: FilingError) -> SubmissionError:
        """Map a pipeline exception to its structured form."""
        location = exc.details.get("location") if exc.details else None
        return cls(kind=exc.kind, message=exc.message, code=exc.code, location=location)


_OPERATIONAL_KINDS = frozenset(
    {ErrorKind.TRANSPORT, ErrorKind.CONFIGURATION, ErrorKind.PAYMENT, ErrorKind.INTERNAL}
)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one orchestrated submission attempt."""

    success: bool
    outcome: SubmissionOutcome
    submission_id: str | None = None
    reference: str | None = None
    errors: Sequence[SubmissionError] = field(default_factory=tuple)
    request_xml: str | None = None
    response_text: str | None = None
    fee_receipt: FeeReceipt | None = None

    @property
    def charged_but_unsubmitted(self) -> bool:
        """Return True when a fee was taken but the filing was not accepted."""
        return self.fee_receipt is not None and not self.success

    @property
    def is_operational_failure(self) -> bool:
        """Return True for "try again later" failures, False for "fix your data"."""
        if self.outcome is SubmissionOutcome.OPERATIONAL_FAILURE:
            return True
        return any(err.kind in _OPERATIONAL_KINDS for err in self.errors) and not self.success

    @property
    def error_messages(self) -> list[str]:
        return [err.message for err in self.errors]
