# src/statutory_filings/application/use_cases/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Use cases."""
