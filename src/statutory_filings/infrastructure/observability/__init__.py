# src/statutory_filings/infrastructure/observability/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Prometheus metric accessors."""
