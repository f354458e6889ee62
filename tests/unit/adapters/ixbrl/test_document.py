# tests/unit/adapters/ixbrl/test_document.py
from __future__ import annotations

from decimal import Decimal

import pytest
from lxml import etree

from statutory_filings.adapters.ixbrl.document import TaggedDocumentGenerator, strip_tags
from statutory_filings.adapters.ixbrl.taxonomy import (
    BALANCE_SHEET,
    BALANCE_SHEET_PREVIOUS,
    CURRENT,
    IX_NS,
    PREVIOUS,
    SCHEMA_REFS,
    XBRLI_NS,
    XHTML_NS,
)
from statutory_filings.domain.entities.financial_statements import FinancialStatementSet
from statutory_filings.domain.enums.filing import EntitySize
from statutory_filings.domain.exceptions.filing import (
    BalanceSheetImbalanceError,
    FilingValidationError,
)
from tests.fixtures.filings_testkit import balance_sheet, filing_context, statement_set

NS = {
    "h": XHTML_NS,
    "ix": IX_NS,
    "xbrli": XBRLI_NS,
    "link": "http://www.xbrl.org/2003/linkbase",
    "xlink": "http://www.w3.org/1999/xlink",
}


def _render(size: EntitySize = EntitySize.SMALL, statements: FinancialStatementSet | None = None) -> etree._Element:
    document = TaggedDocumentGenerator().generate(filing_context(size), statements or statement_set())
    return etree.fromstring(document.content)


def _facts(root: etree._Element, concept: str) -> list[etree._Element]:
    return [
        el
        for el in root.iter(f"{{{IX_NS}}}nonFraction", f"{{{IX_NS}}}nonNumeric")
        if el.get("name") == concept
    ]


def _sections(root: etree._Element) -> list[str]:
    container = root.find(".//h:div[@class='annual-accounts']", NS)
    return [div.get("class") for div in container.findall("h:div", NS)]


def test_generated_document_metadata() -> None:
    document = TaggedDocumentGenerator().generate(filing_context(), statement_set())

    assert document.filename == "12345678-20241231-accounts.html"
    assert document.content.startswith(b"<?xml")
    assert document.size == len(document.content)


def test_header_declares_schema_contexts_and_units() -> None:
    root = _render()

    schema_ref = root.find(".//ix:header/ix:references/link:schemaRef", NS)
    assert schema_ref.get(f"{{{NS['xlink']}}}href") == SCHEMA_REFS[EntitySize.SMALL]

    contexts = {ctx.get("id") for ctx in root.iterfind(".//ix:resources/xbrli:context", NS)}
    assert contexts == {CURRENT, BALANCE_SHEET}
    units = {unit.get("id") for unit in root.iterfind(".//ix:resources/xbrli:unit", NS)}
    assert units == {"GBP", "pure"}

    identifier = root.find(".//xbrli:context[@id='current']/xbrli:entity/xbrli:identifier", NS)
    assert identifier.text == "12345678"
    assert root.find(".//xbrli:context[@id='balance-sheet']/xbrli:period/xbrli:instant", NS).text == "2024-12-31"


def test_every_fact_references_a_declared_context_and_unit() -> None:
    root = _render(EntitySize.LARGE, statement_set(with_cash_flow=True, with_strategic_report=True))

    contexts = {ctx.get("id") for ctx in root.iterfind(".//xbrli:context", NS)}
    units = {unit.get("id") for unit in root.iterfind(".//xbrli:unit", NS)}
    for fact in root.iter(f"{{{IX_NS}}}nonFraction"):
        assert fact.get("contextRef") in contexts
        assert fact.get("unitRef") in units
        assert not fact.text.startswith("-")
    for fact in root.iter(f"{{{IX_NS}}}nonNumeric"):
        assert fact.get("contextRef") in contexts


def test_balance_sheet_totals_are_tagged() -> None:
    root = _render()

    (equity,) = _facts(root, "uk-core:Equity")
    assert equity.text == "120,000"
    assert equity.get("contextRef") == BALANCE_SHEET
    (net_assets,) = _facts(root, "uk-core:NetAssetsLiabilitiesIncludingPensionAssetLiability")
    assert net_assets.text == "120,000"


def test_comparatives_declare_previous_contexts() -> None:
    root = _render(statements=statement_set(previous_sheet=balance_sheet(profit_and_loss="90000", cash=Decimal("30000"))))

    contexts = {ctx.get("id") for ctx in root.iterfind(".//xbrli:context", NS)}
    assert contexts == {CURRENT, PREVIOUS, BALANCE_SHEET, BALANCE_SHEET_PREVIOUS}
    refs = {fact.get("contextRef") for fact in _facts(root, "uk-core:Equity")}
    assert refs == {BALANCE_SHEET, BALANCE_SHEET_PREVIOUS}


@pytest.mark.parametrize(
    ("size", "kwargs", "expected"),
    [
        (EntitySize.MICRO, {}, ["cover", "directors-report", "profit-loss", "balance-sheet", "notes"]),
        (EntitySize.SMALL, {}, ["cover", "directors-report", "profit-loss", "balance-sheet", "notes"]),
        (
            EntitySize.MEDIUM,
            {"with_cash_flow": True},
            ["cover", "directors-report", "profit-loss", "balance-sheet", "cash-flow", "notes"],
        ),
        (
            EntitySize.LARGE,
            {"with_cash_flow": True, "with_strategic_report": True},
            [
                "cover",
                "strategic-report",
                "directors-report",
                "profit-loss",
                "balance-sheet",
                "cash-flow",
                "notes",
            ],
        ),
    ],
)
def test_composition_by_entity_size(size: EntitySize, kwargs: dict[str, bool], expected: list[str]) -> None:
    root = _render(size, statement_set(**kwargs))
    assert _sections(root) == expected


def test_micro_entity_uses_abridged_profit_and_loss() -> None:
    root = _render(EntitySize.MICRO)

    assert _facts(root, "uk-core:Turnover")
    assert not _facts(root, "uk-core:GrossProfitLoss")
    assert SCHEMA_REFS[EntitySize.MICRO] in etree.tostring(root).decode()


def test_unbalanced_statements_are_rejected() -> None:
    with pytest.raises(BalanceSheetImbalanceError) as exc_info:
        TaggedDocumentGenerator().generate(
            filing_context(),
            statement_set(sheet=balance_sheet(profit_and_loss="109000")),
        )
    assert exc_info.value.discrepancy == Decimal("1000")


@pytest.mark.parametrize(
    ("size", "kwargs"),
    [
        (EntitySize.MEDIUM, {}),
        (EntitySize.LARGE, {"with_cash_flow": True}),
    ],
)
def test_missing_required_statement_is_rejected(size: EntitySize, kwargs: dict[str, bool]) -> None:
    with pytest.raises(FilingValidationError):
        TaggedDocumentGenerator().generate(filing_context(size), statement_set(**kwargs))


def test_invalid_context_is_rejected() -> None:
    with pytest.raises(FilingValidationError) as exc_info:
        TaggedDocumentGenerator().generate(filing_context(company_number="123"), statement_set())
    assert "Invalid company number format" in exc_info.value.errors


def test_strip_tags_removes_inline_markup_but_keeps_text() -> None:
    document = TaggedDocumentGenerator().generate(filing_context(), statement_set())

    preview = strip_tags(document)

    assert "ix:" not in preview
    assert IX_NS not in preview
    assert "nonFraction" not in preview
    assert "120,000" in preview
    assert "Acme Widgets Ltd" in preview
    assert etree.fromstring(preview.encode("utf-8")).tag == f"{{{XHTML_NS}}}html"
