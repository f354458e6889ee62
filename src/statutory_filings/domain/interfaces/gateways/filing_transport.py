# src/statutory_filings/domain/interfaces/gateways/filing_transport.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Filing transport gateway interface.

Purpose:
- Define the contract orchestrators use to send a finished envelope to a
  government gateway and receive its raw response.
- Hide HTTP, retry and timeout concerns behind a stable domain contract.

Layer: domain

Notes:
- Implementations must translate transport errors into
  ``RetryableTransportError`` / ``TerminalTransportError``; library exception
  types never leak into the application layer.
"""

from __future__ import annotations

from typing import Protocol

from statutory_filings.domain.entities.submission import GatewayResponse
from statutory_filings.domain.value_objects.cancellation import CancellationToken


class FilingTransport(Protocol):
    """Protocol for gateway transports."""

    async def submit(
        self,
        envelope_xml: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> GatewayResponse:
        """POST an envelope and return the raw response.

        Args:
            envelope_xml: Fully authenticated envelope.
            cancellation: Optional token checked before each retry sleep.

        Returns:
            The 2xx response whose body is well-formed XML.

        Raises:
            TerminalTransportError: Non-retryable status, malformed body, or
                retry budget exhausted on retryable failures.
            SubmissionCancelledError: Cancellation observed between attempts.
        """
