# src/statutory_filings/infrastructure/external_apis/govtalk/client.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk Transport Client: resilient, instrumented, async.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) POST with a per-attempt timeout.
* Exponential retries (bounded, no jitter by default so delays strictly
  increase) for timeouts, connection failures and HTTP 429/502/503.
* Deterministic mapping to filing transport errors.
* Prometheus metrics and structured logs.

Notes:
    * Caller-facing exceptions are always filing domain exceptions; httpx
      types are never allowed to cross the boundary.
    * A 2xx response whose body is not well-formed XML is terminal.
    * An exhausted retry budget is surfaced as a terminal failure carrying
      the last status code and body.
    * No state is kept between submissions; the only shared resource is the
      optional injected ``httpx.AsyncClient``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from contextlib import suppress
from typing import Final

import httpx

from statutory_filings.adapters.govtalk.responses import parse_xml
from statutory_filings.config.settings import GatewayEndpoint, TransportConfig
from statutory_filings.domain.entities.submission import GatewayResponse
from statutory_filings.domain.exceptions.filing import (
    RetryableTransportError,
    SubmissionCancelledError,
    TerminalTransportError,
    TransportError,
)
from statutory_filings.domain.value_objects.cancellation import CancellationToken
from statutory_filings.infrastructure.logging.logger import get_request_id, get_trace_id
from statutory_filings.infrastructure.observability.metrics_gateway import (
    get_gateway_errors_total,
    get_gateway_http_status_total,
    get_gateway_latency_seconds,
    get_gateway_retries_total,
)
from statutory_filings.infrastructure.resilience.retry import RetryPolicy, Sleep, retry_async

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 502, 503})

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "text/xml, application/xml",
    "User-Agent": "statutory-filings/0.1",
}


class GovTalkClient:
    """Resilient, instrumented transport client for one GovTalk gateway."""

    def __init__(
        self,
        endpoint: GatewayEndpoint,
        config: TransportConfig | None = None,
        *,
        http: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the transport client.

        Args:
            endpoint: Resolved gateway URL and content type.
            config: Timeout and retry budget; defaults apply when omitted.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            retry_policy: Optional retry configuration overriding ``config``.
            sleep: Awaitable used for backoff sleeps (injectable for tests).
        """
        cfg = config or TransportConfig()
        self._endpoint = endpoint
        self._timeout = float(cfg.timeout_s)
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout)
        self._retry = retry_policy or RetryPolicy(
            total=cfg.max_retries,
            base=cfg.backoff_base_s,
            cap=cfg.backoff_cap_s,
            jitter=False,
        )
        self._sleep = sleep

        # Metrics handles.
        self._latency = get_gateway_latency_seconds()
        self._status_total = get_gateway_http_status_total()
        self._retries_total = get_gateway_retries_total()
        self._errors_total = get_gateway_errors_total()

    @property
    def endpoint(self) -> GatewayEndpoint:
        return self._endpoint

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def submit(
        self,
        envelope_xml: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> GatewayResponse:
        """POST an envelope and return the raw 2xx response.

        Raises:
            TerminalTransportError: Non-retryable status, malformed body or
                exhausted retry budget.
            SubmissionCancelledError: Cancellation observed before a retry.
        """
        gateway = self._endpoint.kind.value
        headers = self._headers()
        content = envelope_xml.encode("utf-8")
        attempts = 0

        async def _call() -> GatewayResponse:
            nonlocal attempts
            attempts += 1
            response = await self._perform_request(content=content, headers=headers)
            return self._handle_response(response, attempts=attempts)

        def _on_retry(attempt: int, exc: Exception, delay: float) -> None:
            with suppress(Exception):
                self._retries_total.labels(gateway, type(exc).__name__).inc()
            logger.warning(
                "filings.gateway.retry",
                extra={
                    "gateway": gateway,
                    "attempt": attempt,
                    "delay_s": delay,
                    "status_code": getattr(exc, "status_code", None),
                    "reason": exc.message if isinstance(exc, TransportError) else str(exc),
                },
            )

        logger.info(
            "filings.gateway.submit.start",
            extra={"gateway": gateway, "url": self._endpoint.url, "bytes": len(content)},
        )
        start = time.perf_counter()
        error_reason: str | None = None
        try:
            result = await retry_async(
                _call,
                policy=self._retry,
                retry_on=lambda exc: isinstance(exc, RetryableTransportError),
                sleep=self._sleep,
                cancellation=cancellation,
                on_retry=_on_retry,
            )
        except RetryableTransportError as exc:
            error_reason = "retries_exhausted"
            raise TerminalTransportError(
                f"Gateway unavailable after {attempts} attempts: {exc.message}",
                status_code=exc.status_code,
                response_text=exc.response_text,
                details={**exc.details, "attempts": attempts, "retries_exhausted": True},
            ) from exc
        except TransportError as exc:
            error_reason = type(exc).__name__
            raise
        except SubmissionCancelledError:
            error_reason = "cancelled"
            raise
        finally:
            elapsed = time.perf_counter() - start
            with suppress(Exception):
                self._latency.labels(
                    gateway=gateway,
                    outcome="error" if error_reason else "success",
                ).observe(elapsed)
                if error_reason:
                    self._errors_total.labels(gateway=gateway, reason=error_reason).inc()

        logger.info(
            "filings.gateway.submit.success",
            extra={
                "gateway": gateway,
                "status_code": result.status_code,
                "attempts": result.attempts,
                "elapsed_s": round(time.perf_counter() - start, 3),
            },
        )
        return result

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _headers(self) -> dict[str, str]:
        headers = {**_DEFAULT_HEADERS, "Content-Type": self._endpoint.content_type}
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if trace_id:
            headers["x-trace-id"] = trace_id
        return headers

    async def _perform_request(
        self,
        *,
        content: bytes,
        headers: Mapping[str, str],
    ) -> httpx.Response:
        """Execute a single HTTP POST and map transport errors."""
        try:
            return await self._client.post(
                self._endpoint.url,
                content=content,
                headers=dict(headers),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise RetryableTransportError(
                "Gateway request timed out",
                details={"url": self._endpoint.url, "error": type(exc).__name__},
            ) from exc
        except httpx.TransportError as exc:
            raise RetryableTransportError(
                "Gateway connection failure",
                details={"url": self._endpoint.url, "error": str(exc)},
            ) from exc

    def _handle_response(self, response: httpx.Response, *, attempts: int) -> GatewayResponse:
        """Map an HTTP response into a gateway response or transport error."""
        status = response.status_code
        with suppress(Exception):
            self._status_total.labels(self._endpoint.kind.value, str(status)).inc()

        text = response.text
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableTransportError(
                f"Gateway returned HTTP {status}",
                status_code=status,
                response_text=text,
                details={"url": self._endpoint.url, "status": status},
            )
        if not 200 <= status < 300:
            raise TerminalTransportError(
                f"Gateway returned HTTP {status}",
                status_code=status,
                response_text=text,
                details={"url": self._endpoint.url, "status": status},
            )

        # Raises TerminalTransportError on malformed XML.
        parse_xml(text)
        return GatewayResponse(status_code=status, text=text, attempts=attempts)
