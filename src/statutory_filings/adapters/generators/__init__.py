# src/statutory_filings/adapters/generators/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Filing body generators and their validators."""
