# src/statutory_filings/domain/entities/tagged_document.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Tagged document entity.

Purpose:
    Hold one rendered Inline XBRL document (XHTML bytes) and the filename it
    is packaged under.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaggedDocument:
    """A rendered iXBRL document.

    Args:
        filename: Archive entry name (e.g. ``12345678-20241231-accounts.html``).
        content: UTF-8 encoded XHTML.
    """

    filename: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @property
    def size(self) -> int:
        return len(self.content)
