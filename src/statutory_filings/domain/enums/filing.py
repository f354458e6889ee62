# src/statutory_filings/domain/enums/filing.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing enums.

Purpose:
    Closed classification sets that drive schema choice, envelope content and
    result reporting across the filing pipeline.

Layer:
    domain/enums

Notes:
    - Pure domain types:
        * No logging.
        * No HTTP or transport concerns.
"""

from __future__ import annotations

from enum import Enum


class EntitySize(str, Enum):
    """Companies Act size classification of the reporting entity."""

    MICRO = "micro"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Environment(str, Enum):
    """Gateway environment a submission is sent to."""

    TEST = "test"
    LIVE = "live"


class GatewayKind(str, Enum):
    """Government gateway receiving a submission."""

    COMPANIES_HOUSE = "companies_house"
    HMRC = "hmrc"


class MessageQualifier(str, Enum):
    """GovTalk message qualifier."""

    REQUEST = "request"
    RESPONSE = "response"
    ACKNOWLEDGEMENT = "acknowledgement"
    POLL = "poll"
    ERROR = "error"


class MessageClass(str, Enum):
    """GovTalk message class per filing type."""

    CONFIRMATION_STATEMENT = "ConfirmationStatement"
    ACCOUNTS = "Accounts"
    CORPORATION_TAX = "HMRC-CT-CT600"


class ProfitLossFormat(str, Enum):
    """Presentation depth of the profit and loss account."""

    ABRIDGED = "abridged"
    STANDARD = "standard"
    DETAILED = "detailed"


class TradingStatus(str, Enum):
    """Trading status declared on a confirmation statement."""

    TRADING = "trading"
    DORMANT = "dormant"


class RegisterLocation(str, Enum):
    """Where the statutory registers are kept."""

    REGISTERED_OFFICE = "registered_office"
    SAIL_ADDRESS = "sail_address"
    OTHER = "other"


class SubmissionOutcome(str, Enum):
    """Outcome of a single orchestrated submission."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    INVALID = "invalid"
    OPERATIONAL_FAILURE = "operational_failure"
    CANCELLED = "cancelled"


class ErrorKind(str, Enum):
    """Classification of structured submission errors."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    CANONICALIZATION = "canonicalization"
    TRANSPORT = "transport"
    GATEWAY_REJECTION = "gateway_rejection"
    PAYMENT = "payment"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


__all__ = [
    "EntitySize",
    "Environment",
    "ErrorKind",
    "GatewayKind",
    "MessageClass",
    "MessageQualifier",
    "ProfitLossFormat",
    "RegisterLocation",
    "SubmissionOutcome",
    "TradingStatus",
]
