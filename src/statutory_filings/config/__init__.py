# src/statutory_filings/config/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Config package export.

Keeps import sites clean and stable:
    from statutory_filings.config import get_settings, FilingSettings
"""

from __future__ import annotations

from .settings import FilingSettings, get_settings

__all__ = ["FilingSettings", "get_settings"]
