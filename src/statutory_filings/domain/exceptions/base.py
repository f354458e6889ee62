# src/statutory_filings/domain/exceptions/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base Domain Exceptions.

Summary:
    Canonical base class for filing-pipeline exceptions. Every error that can
    reach an orchestrator boundary derives from :class:`FilingError` so it can
    be converted deterministically into a structured submission error.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any

from statutory_filings.domain.enums.filing import ErrorKind


class FilingError(Exception):
    """Base class for all filing-pipeline exceptions.

    Attributes:
        code:
            Stable error code suitable for logs and metrics.
        kind:
            Coarse error classification used by callers to distinguish data
            problems from operational failures.
        message:
            Human-readable error message, safe to surface to end users.
        details:
            Optional machine-readable diagnostic payload.
    """

    code: str = "FILING_ERROR"
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        """Initialize a FilingError instance.

        Args:
            message:
                Human-readable error message.
            details:
                Optional structured diagnostic payload for logs or callers.
        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        """Return the human-readable message for this error."""
        return self.message
