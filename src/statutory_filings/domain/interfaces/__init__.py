# src/statutory_filings/domain/interfaces/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Domain ports."""
