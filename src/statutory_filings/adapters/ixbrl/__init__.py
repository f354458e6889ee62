# src/statutory_filings/adapters/ixbrl/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Inline XBRL adapters.

Purpose:
    Render financial statements as a tagged XHTML document and package it
    for gateway submission.

    * document: Document assembly (header, contexts, units, sections).
    * tagging: ``ix:nonFraction`` / ``ix:nonNumeric`` primitives.
    * balance_sheet, profit_loss, cash_flow, strategic_report,
      directors_report, notes: per-statement encoders.
    * packaging: Deterministic ZIP + base64.
"""

from __future__ import annotations
