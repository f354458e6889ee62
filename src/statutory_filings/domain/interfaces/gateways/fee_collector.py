# src/statutory_filings/domain/interfaces/gateways/fee_collector.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Fee collector gateway interface.

Purpose:
- Abstract payment capture for filings whose submission is priced (e.g. the
  confirmation statement fee).

Layer: domain

Notes:
- ``charge`` must be atomic: a declined charge leaves no side effect.
- The idempotency key is the submission's transaction id, so retrying the
  same attempt never charges twice.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from statutory_filings.domain.entities.submission import FeeReceipt


class FeeCollector(Protocol):
    """Protocol for collecting a statutory fee before submission."""

    async def charge(
        self,
        *,
        company_number: str,
        amount: Decimal,
        description: str,
        idempotency_key: str,
    ) -> FeeReceipt:
        """Charge the fee and return a receipt.

        Raises:
            PaymentDeclinedError: If the charge could not be taken.
        """
