# src/statutory_filings/domain/enums/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Closed classification sets."""
