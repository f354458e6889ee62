# src/statutory_filings/infrastructure/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Infrastructure layer: logging, metrics, resilience and gateway transports."""
