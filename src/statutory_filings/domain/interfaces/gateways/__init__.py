# src/statutory_filings/domain/interfaces/gateways/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Gateway Protocols implemented by adapters and infrastructure."""
