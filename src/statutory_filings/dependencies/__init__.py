# src/statutory_filings/dependencies/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Composition root for filing services."""
