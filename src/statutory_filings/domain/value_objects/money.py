# src/statutory_filings/domain/value_objects/money.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Monetary helpers shared by the financial statement entities."""

from __future__ import annotations

from dataclasses import fields
from decimal import Decimal, InvalidOperation
from typing import Any

from statutory_filings.domain.exceptions.filing import FilingValidationError

ZERO = Decimal("0")

# One currency minor unit; the accounting identity must hold within this.
BALANCE_TOLERANCE = Decimal("0.01")


def to_decimal(value: Any, *, field_name: str = "value") -> Decimal:
    """Coerce ints, strings and Decimals into a finite Decimal.

    Floats are converted through ``str`` so that ``0.1`` stays ``Decimal("0.1")``.

    Raises:
        FilingValidationError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise FilingValidationError(f"{field_name} must be numeric, got bool")
    elif isinstance(value, int | float | str):
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise FilingValidationError(
                f"{field_name} must be numeric",
                details={"field": field_name, "value": str(value)},
            ) from exc
    else:
        raise FilingValidationError(
            f"{field_name} must be numeric",
            details={"field": field_name, "type": type(value).__name__},
        )
    if not result.is_finite():
        raise FilingValidationError(f"{field_name} must be finite")
    return result


def coerce_decimal_fields(instance: Any) -> None:
    """Coerce every Decimal-annotated field of a frozen dataclass in place."""
    for f in fields(instance):
        annotation = str(f.type)
        if not annotation.startswith("Decimal"):
            continue
        raw = getattr(instance, f.name)
        if raw is None:
            continue
        object.__setattr__(instance, f.name, to_decimal(raw, field_name=f.name))
