# src/statutory_filings/domain/services/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Pure domain services (balance identity, entity size rules)."""
