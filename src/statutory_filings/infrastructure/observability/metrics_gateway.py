# src/statutory_filings/infrastructure/observability/metrics_gateway.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing gateway metrics.

Purpose:
    Provide Prometheus metrics for government gateway calls and submissions:
      * Gateway latency histograms.
      * HTTP status distribution.
      * Retry and error counters by reason.
      * Submission outcomes per filing type.

Design:
    - Functions return singleton metric instances created on first use.
    - Label values are closed sets (gateway kind, outcome, exception name);
      company numbers and transaction ids are never used as labels.
"""

from __future__ import annotations

from typing import Any, Final

from prometheus_client import Counter, Histogram

_LATENCY_BUCKETS: Final[tuple[float, ...]] = (
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
    60.0,
)

_gateway_latency_seconds: Any | None = None
_gateway_http_status_total: Any | None = None
_gateway_retries_total: Any | None = None
_gateway_errors_total: Any | None = None
_submissions_total: Any | None = None


def get_gateway_latency_seconds() -> Any:
    """Return (and lazily create) the gateway latency histogram."""
    global _gateway_latency_seconds
    if _gateway_latency_seconds is None:
        _gateway_latency_seconds = Histogram(
            "filing_gateway_latency_seconds",
            "Latency of filing gateway submissions in seconds (all attempts).",
            ["gateway", "outcome"],
            buckets=_LATENCY_BUCKETS,
        )
    return _gateway_latency_seconds


def get_gateway_http_status_total() -> Any:
    """Return (and lazily create) the gateway HTTP status counter."""
    global _gateway_http_status_total
    if _gateway_http_status_total is None:
        _gateway_http_status_total = Counter(
            "filing_gateway_http_status_total",
            "Filing gateway HTTP responses by status code.",
            ["gateway", "status"],
        )
    return _gateway_http_status_total


def get_gateway_retries_total() -> Any:
    """Return (and lazily create) the gateway retry counter."""
    global _gateway_retries_total
    if _gateway_retries_total is None:
        _gateway_retries_total = Counter(
            "filing_gateway_retries_total",
            "Total number of filing gateway retries.",
            ["gateway", "reason"],
        )
    return _gateway_retries_total


def get_gateway_errors_total() -> Any:
    """Return (and lazily create) the gateway error counter."""
    global _gateway_errors_total
    if _gateway_errors_total is None:
        _gateway_errors_total = Counter(
            "filing_gateway_errors_total",
            "Total number of filing gateway transport errors.",
            ["gateway", "reason"],
        )
    return _gateway_errors_total


def get_submissions_total() -> Any:
    """Return (and lazily create) the submission outcome counter."""
    global _submissions_total
    if _submissions_total is None:
        _submissions_total = Counter(
            "filing_submissions_total",
            "Orchestrated filing submissions by filing type and outcome.",
            ["filing_type", "outcome"],
        )
    return _submissions_total
