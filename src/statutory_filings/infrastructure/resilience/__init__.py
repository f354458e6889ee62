# src/statutory_filings/infrastructure/resilience/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Retry primitives."""
