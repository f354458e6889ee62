# src/statutory_filings/domain/exceptions/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing exception hierarchy."""
