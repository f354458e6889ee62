# src/statutory_filings/application/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Application layer (filing orchestrators)."""
