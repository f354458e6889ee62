# src/statutory_filings/infrastructure/external_apis/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""External gateway clients."""
