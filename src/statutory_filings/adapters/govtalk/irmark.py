# src/statutory_filings/adapters/govtalk/irmark.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""IRmark integrity mark engine.

Purpose:
    Compute the generic IRmark of a GovTalk envelope and build envelopes that
    carry their own mark.

Layer:
    adapters/govtalk

Algorithm:
    1. Parse the envelope (no entity resolution, no network).
    2. Locate ``{http://www.govtalk.gov.uk/CM/envelope}Body``.
    3. Remove every ``IRmark`` element in the document, whatever its namespace.
    4. Canonicalize the body subtree with inclusive C14N 1.0, no comments.
    5. Normalize line endings to ``\\n``.
    6. SHA-1 over the UTF-8 bytes, encoded as base64.

Notes:
    - A mark describes the body *without* any mark element, so a document
      built with a placeholder and the same document rebuilt with the real
      mark have the same mark. ``build_marked_envelope`` relies on this and
      renders the envelope twice instead of editing one in place.
    - More than one pre-existing mark is tolerated (all are removed) and
      logged at WARNING.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Callable
from typing import Final

from lxml import etree

from statutory_filings.adapters.govtalk.envelope import GOVTALK_NS, secure_parser
from statutory_filings.domain.exceptions.filing import CanonicalizationError

logger = logging.getLogger(__name__)

IRMARK_LOCAL_NAME: Final[str] = "IRmark"
IRMARK_PLACEHOLDER: Final[str] = "IRMARK-PLACEHOLDER"

RenderEnvelope = Callable[[str], str]


def _remove_preserving_tail(el: etree._Element) -> None:
    """Detach ``el`` but keep the text that followed it in the document."""
    parent = el.getparent()
    if parent is None:
        return
    if el.tail:
        previous = el.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + el.tail
        else:
            parent.text = (parent.text or "") + el.tail
    parent.remove(el)


def canonical_body(envelope_xml: str | bytes) -> bytes:
    """Return the canonical, mark-free body bytes the IRmark is computed over.

    Raises:
        CanonicalizationError: If the XML is malformed or has no GovTalk ``Body``.
    """
    raw = envelope_xml.encode("utf-8") if isinstance(envelope_xml, str) else envelope_xml
    try:
        root = etree.fromstring(raw, secure_parser())
    except etree.XMLSyntaxError as exc:
        raise CanonicalizationError(
            "Envelope is not well-formed XML",
            details={"reason": "malformed_xml", "error": str(exc)},
        ) from exc

    body = root if root.tag == f"{{{GOVTALK_NS}}}Body" else root.find(f".//{{{GOVTALK_NS}}}Body")
    if body is None:
        raise CanonicalizationError(
            "No GovTalk Body element found in envelope",
            details={"reason": "missing_body"},
        )

    marks = [
        el
        for el in root.iter(etree.Element)
        if etree.QName(el).localname == IRMARK_LOCAL_NAME
    ]
    if len(marks) > 1:
        logger.warning("filings.irmark.multiple_marks_removed", extra={"count": len(marks)})
    for el in marks:
        _remove_preserving_tail(el)

    try:
        canonical = etree.tostring(body, method="c14n", exclusive=False, with_comments=False)
    except (etree.C14NError, ValueError) as exc:
        raise CanonicalizationError(
            "Body canonicalization failed",
            details={"reason": "c14n_failed", "error": str(exc)},
        ) from exc

    return canonical.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


def compute_mark(envelope_xml: str | bytes) -> str:
    """Compute the base64 SHA-1 IRmark of an envelope.

    Deterministic and side-effect free.

    Raises:
        CanonicalizationError: If the envelope cannot be canonicalized.
    """
    digest = hashlib.sha1(canonical_body(envelope_xml)).digest()  # noqa: S324
    return base64.b64encode(digest).decode("ascii")


def verify_mark(envelope_xml: str | bytes, mark: str) -> bool:
    """Return True when ``mark`` matches the envelope's current body."""
    return compute_mark(envelope_xml) == mark


def build_marked_envelope(render: RenderEnvelope) -> tuple[str, str]:
    """Run the two-pass construction and return ``(final_envelope, mark)``.

    Args:
        render: Pure function rendering the complete envelope with the given
            mark value in its ``IRmark`` element.

    Raises:
        CanonicalizationError: If the mark of the final envelope differs from
            the provisional one, i.e. ``render`` changed more than the mark.
    """
    provisional = render(IRMARK_PLACEHOLDER)
    mark = compute_mark(provisional)
    final = render(mark)
    if IRMARK_PLACEHOLDER in final or compute_mark(final) != mark:
        raise CanonicalizationError(
            "Rendered envelope does not carry a valid IRmark",
            details={"reason": "unstable_render"},
        )
    return final, mark
