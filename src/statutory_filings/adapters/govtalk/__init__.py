# src/statutory_filings/adapters/govtalk/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk envelope, integrity mark, authentication and response parsing."""
