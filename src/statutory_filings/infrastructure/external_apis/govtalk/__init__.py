# src/statutory_filings/infrastructure/external_apis/govtalk/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GovTalk external API package.

Purpose:
    Group gateway transport infrastructure:

    * client: Resilient async HTTP client for the Companies House and HMRC
      GovTalk gateways.
"""

from __future__ import annotations
