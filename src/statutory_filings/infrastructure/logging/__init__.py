# src/statutory_filings/infrastructure/logging/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Structured JSON logging."""
