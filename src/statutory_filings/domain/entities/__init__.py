# src/statutory_filings/domain/entities/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing entities."""
