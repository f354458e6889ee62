# src/statutory_filings/adapters/ixbrl/packaging.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Submission packaging.

Purpose:
    Bundle tagged documents into a deterministic ZIP archive and encode it as
    base64 for the accounts body; unpack such a blob back into documents.

Layer:
    adapters/ixbrl

Notes:
    - Entries keep the given order, use a fixed 1980-01-01 timestamp and
      fixed permissions, so identical documents give identical bytes.
    - Duplicate or empty filenames are rejected.
"""

from __future__ import annotations

import base64
import binascii
import io
import zipfile
from collections.abc import Sequence
from typing import Final

from statutory_filings.domain.entities.filing_context import FilingContext
from statutory_filings.domain.entities.tagged_document import TaggedDocument
from statutory_filings.domain.exceptions.filing import FilingValidationError

FIXED_TIMESTAMP: Final[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)
_FILE_MODE: Final[int] = 0o100644


def document_filename(context: FilingContext) -> str:
    """Return ``<company>-<YYYYMMDD>-accounts.html`` for a filing context."""
    return f"{context.company_number}-{context.period_end:%Y%m%d}-accounts.html"


def package_for_submission(documents: Sequence[TaggedDocument]) -> str:
    """Return the base64 (ASCII) encoding of a deterministic ZIP of ``documents``.

    Raises:
        FilingValidationError: No documents, or an empty or duplicate filename.
    """
    if not documents:
        raise FilingValidationError("At least one document is required for packaging")

    seen: set[str] = set()
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        for document in documents:
            name = document.filename
            if not name or not name.strip():
                raise FilingValidationError("Document filename is required")
            if name in seen:
                raise FilingValidationError(
                    f"Duplicate document filename: {name}",
                    details={"filename": name},
                )
            seen.add(name)
            info = zipfile.ZipInfo(filename=name, date_time=FIXED_TIMESTAMP)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = _FILE_MODE << 16
            info.create_system = 3
            archive.writestr(info, document.content)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def unpack_submission(blob: str) -> list[TaggedDocument]:
    """Decode a packaged blob back into documents, in archive order.

    Raises:
        FilingValidationError: If the blob is not base64 or not a ZIP archive.
    """
    try:
        raw = base64.b64decode(blob.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise FilingValidationError("Package is not valid base64") from exc
    try:
        with zipfile.ZipFile(io.BytesIO(raw)) as archive:
            return [
                TaggedDocument(filename=info.filename, content=archive.read(info))
                for info in archive.infolist()
            ]
    except zipfile.BadZipFile as exc:
        raise FilingValidationError("Package is not a valid ZIP archive") from exc


__all__ = ["FIXED_TIMESTAMP", "document_filename", "package_for_submission", "unpack_submission"]
