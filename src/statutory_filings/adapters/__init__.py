# src/statutory_filings/adapters/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Adapters layer: GovTalk protocol, body generators and iXBRL."""
