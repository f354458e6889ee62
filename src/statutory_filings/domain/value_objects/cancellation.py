# src/statutory_filings/domain/value_objects/cancellation.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Cooperative cancellation signal for submission pipelines.

The token is checked between pipeline stages and before each retry sleep.
An HTTP call already in flight is never interrupted; it completes or times
out, so the gateway never sees a half-written request.
"""

from __future__ import annotations

import asyncio

from statutory_filings.domain.exceptions.filing import SubmissionCancelledError


class CancellationToken:
    """One-shot cancellation flag owned by the caller of a submission."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Request cancellation; repeated calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self, stage: str) -> None:
        """Raise ``SubmissionCancelledError`` if cancellation was requested.

        Args:
            stage: Pipeline stage about to start, reported in the error details.
        """
        if self._event.is_set():
            raise SubmissionCancelledError(
                f"Submission cancelled before {stage}",
                details={"stage": stage, "reason": self._reason},
            )
