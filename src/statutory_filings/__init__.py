# src/statutory_filings/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Statutory filings: GovTalk submission pipeline for Companies House and HMRC."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
