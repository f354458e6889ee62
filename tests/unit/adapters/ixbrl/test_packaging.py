# tests/unit/adapters/ixbrl/test_packaging.py
from __future__ import annotations

import base64
import io
import zipfile

import pytest

from statutory_filings.adapters.ixbrl.packaging import (
    FIXED_TIMESTAMP,
    document_filename,
    package_for_submission,
    unpack_submission,
)
from statutory_filings.domain.entities.tagged_document import TaggedDocument
from statutory_filings.domain.exceptions.filing import FilingValidationError
from tests.fixtures.filings_testkit import filing_context


def _docs() -> list[TaggedDocument]:
    return [
        TaggedDocument("accounts.html", "<html>Accounts £1,000</html>".encode()),
        TaggedDocument("notes.html", b"<html>Notes</html>"),
    ]


def test_round_trip_preserves_names_order_and_bytes() -> None:
    docs = _docs()

    restored = unpack_submission(package_for_submission(docs))

    assert restored == docs


def test_packaging_is_deterministic() -> None:
    assert package_for_submission(_docs()) == package_for_submission(_docs())


def test_archive_entries_use_fixed_timestamp() -> None:
    raw = base64.b64decode(package_for_submission(_docs()))
    with zipfile.ZipFile(io.BytesIO(raw)) as archive:
        infos = archive.infolist()

    assert [info.date_time for info in infos] == [FIXED_TIMESTAMP, FIXED_TIMESTAMP]
    assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in infos)


def test_blob_is_ascii_base64() -> None:
    blob = package_for_submission(_docs())
    assert blob.isascii()
    base64.b64decode(blob, validate=True)


@pytest.mark.parametrize(
    "documents",
    [
        [],
        [TaggedDocument("", b"x")],
        [TaggedDocument("a.html", b"1"), TaggedDocument("a.html", b"2")],
    ],
)
def test_invalid_document_lists_are_rejected(documents: list[TaggedDocument]) -> None:
    with pytest.raises(FilingValidationError):
        package_for_submission(documents)


@pytest.mark.parametrize("blob", ["not base64!", base64.b64encode(b"plain text").decode()])
def test_unpack_rejects_garbage(blob: str) -> None:
    with pytest.raises(FilingValidationError):
        unpack_submission(blob)


def test_document_filename() -> None:
    assert document_filename(filing_context()) == "12345678-20241231-accounts.html"
