# src/statutory_filings/domain/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Domain layer: entities, enums, exceptions, value objects, services and ports."""
