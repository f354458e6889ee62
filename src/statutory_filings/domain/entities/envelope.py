# src/statutory_filings/domain/entities/envelope.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk envelope entities.

Purpose:
    Describe the transport wrapper of a gateway submission: message details,
    sender identity and authentication, classification keys and the request
    handed to an authenticator.

Layer:
    domain

Notes:
    - Keys are an ordered sequence of ``(type, value)`` pairs so that the
      emitted ``Keys`` element is reproducible.
    - ``FilingRequest.transaction_id`` is unique per attempt; the gateway
      echoes it in correlated responses.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from statutory_filings.domain.enums.filing import MessageQualifier

Keys = Sequence[tuple[str, str]]


def new_transaction_id(prefix: str) -> str:
    """Return an upper-case ``<PREFIX>-<epoch ms>-<random>`` transaction id."""
    epoch_ms = int(time.time() * 1000)
    return f"{prefix}-{epoch_ms}-{secrets.token_hex(4)}".upper()


@dataclass(frozen=True)
class Authentication:
    method: str
    value: str


@dataclass(frozen=True)
class MessageDetails:
    message_class: str
    qualifier: MessageQualifier
    transaction_id: str
    correlation_id: str | None = None
    gateway_test: bool | None = None


@dataclass(frozen=True)
class SenderDetails:
    sender_id: str
    authentication: Authentication | None = None
    email: str | None = None


@dataclass(frozen=True)
class EnvelopeHeader:
    message_details: MessageDetails
    sender_details: SenderDetails


@dataclass(frozen=True)
class FilingRequest:
    """Input to an authentication strategy.

    Args:
        message_class: GovTalk class naming the filing type.
        transaction_id: Caller-generated id, unique per attempt.
        body_xml: Well-formed XML fragment carried in the envelope body.
        keys: Classification keys (e.g. ``("CompanyNumber", "12345678")``).
        period_end: Accounting period end (mark-based envelopes only).
    """

    message_class: str
    transaction_id: str
    body_xml: str
    keys: Keys = field(default_factory=tuple)
    period_end: str | None = None
