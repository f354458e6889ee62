# src/statutory_filings/domain/value_objects/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Value objects."""
