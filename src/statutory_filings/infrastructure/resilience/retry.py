# src/statutory_filings/infrastructure/resilience/retry.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Retry utilities (async) with exponential backoff."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from statutory_filings.domain.value_objects.cancellation import CancellationToken

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry attempts."""

    total: int  # number of retries (not counting the first attempt)
    base: float  # base backoff seconds
    cap: float  # max backoff seconds
    jitter: bool = False  # full jitter; off keeps delays strictly increasing

    def delay_for(self, attempt: int) -> float:
        """Return the un-jittered delay before retry number ``attempt + 1``."""
        return min(self.cap, self.base * (2**attempt))


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    retry_on: Callable[[Exception], bool],
    sleep: Sleep = asyncio.sleep,
    cancellation: CancellationToken | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> T:
    """Retry an async function with backoff until success or budget exhausted.

    Args:
        fn: Zero-arg async function to execute.
        policy: RetryPolicy defining count/backoff.
        retry_on: Predicate that returns True when an exception is retryable.
        sleep: Awaitable sleep used between attempts (injectable for tests).
        cancellation: Optional token checked before each backoff sleep.
        on_retry: Optional callback ``(attempt, exc, delay)`` invoked before sleeping.

    Returns:
        The return value of ``fn`` if successful.

    Raises:
        The last exception if it is not retryable or retries are exhausted.
        SubmissionCancelledError: If cancellation is observed before a sleep.
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as exc:  # noqa: BLE001
            if attempt >= policy.total or not retry_on(exc):
                raise
            backoff = policy.delay_for(attempt)
            if policy.jitter:
                backoff = random.uniform(0, backoff)  # noqa: S311
            if on_retry is not None:
                on_retry(attempt + 1, exc, backoff)
            if cancellation is not None:
                cancellation.raise_if_cancelled("retry")
        await sleep(backoff)
        attempt += 1
