# tests/unit/adapters/generators/test_confirmation_statement_generator.py
from __future__ import annotations

from datetime import date

import pytest
from lxml import etree

from statutory_filings.adapters.generators.common import CH_SCHEMA_NS
from statutory_filings.adapters.generators.confirmation_statement import (
    generate_confirmation_statement_body,
    validate_confirmation_statement,
)
from statutory_filings.domain.entities.confirmation_statement import (
    Address,
    PersonWithSignificantControl,
    Shareholder,
)
from statutory_filings.domain.enums.filing import RegisterLocation
from tests.fixtures.filings_testkit import confirmation_statement

NS = {"ch": CH_SCHEMA_NS}


def test_valid_statement_has_no_errors() -> None:
    assert validate_confirmation_statement(confirmation_statement()) == []


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"shareholders": ()}, "At least one shareholder is required"),
        ({"company_number": "1234"}, "Company number must be at least 8 characters"),
        ({"registered_email": "not-an-email"}, "Valid registered email address is required"),
        ({"sic_codes": (" ",)}, "At least one SIC code is required"),
        ({"directors": ()}, "At least one director is required"),
        ({"lawful_purpose_confirmed": False}, "Statement of lawful purposes must be confirmed"),
        ({"made_up_to_date": None}, "Made up to date is required"),
        (
            {"trades_on_stock_exchange": True},
            "Stock exchange name is required when trading on a stock exchange",
        ),
        (
            {"register_location": RegisterLocation.SAIL_ADDRESS},
            "Inspection address is required when registers are not kept at the registered office",
        ),
    ],
)
def test_rule_violations(overrides: dict[str, object], message: str) -> None:
    assert message in validate_confirmation_statement(confirmation_statement(**overrides))


def test_shareholder_with_undeclared_class_is_reported() -> None:
    data = confirmation_statement(shareholders=(Shareholder("Bob", 10, "Preference"),))
    assert validate_confirmation_statement(data) == [
        "Shareholder Bob holds undeclared share class Preference"
    ]


def test_control_characters_are_reported_with_their_field_path() -> None:
    data = confirmation_statement(
        shareholders=(Shareholder("Jane\x00Smith", 100),),
        registered_office=Address(("1 High\x07Street",), "London", "EC1A 1AA"),
    )

    assert validate_confirmation_statement(data) == [
        "confirmation_statement.registered_office.lines[0] contains characters not allowed in XML",
        "confirmation_statement.shareholders[0].name contains characters not allowed in XML",
    ]


def test_psc_needs_a_nature_of_control() -> None:
    psc = PersonWithSignificantControl(
        name="Jane Smith",
        nationality="British",
        date_of_birth=date(1980, 5, 1),
        service_address=Address(("1 High Street",), "London", "EC1A 1AA"),
        natures_of_control=(),
    )
    errors = validate_confirmation_statement(confirmation_statement(persons_with_significant_control=(psc,)))
    assert errors == ["Person with significant control Jane Smith needs at least one nature of control"]


def test_body_layout() -> None:
    root = etree.fromstring(generate_confirmation_statement_body(confirmation_statement()).encode("utf-8"))

    assert root.tag == f"{{{CH_SCHEMA_NS}}}ConfirmationStatement"
    assert root.findtext("ch:CompanyNumber", namespaces=NS) == "12345678"
    assert root.findtext("ch:MadeUpToDate", namespaces=NS) == "2025-02-28"
    assert root.findtext("ch:RegisteredOffice/ch:AddressLine1", namespaces=NS) == "1 High Street"
    assert root.findtext("ch:SICCodes/ch:SICCode", namespaces=NS) == "25990"
    assert root.findtext("ch:Shareholders/ch:Shareholder/ch:SharesHeld", namespaces=NS) == "100"
    assert root.findtext("ch:ShareClasses/ch:ShareClass/ch:NominalValue", namespaces=NS) == "1.00"
    assert root.findtext("ch:StatementOfCapital/ch:AggregateNominalValue", namespaces=NS) == "100.00"
    assert root.findtext("ch:StatutoryRegisters/ch:Location", namespaces=NS) == "RegisteredOffice"
    assert root.findtext("ch:Declarations/ch:StatementOfLawfulPurposes", namespaces=NS) == "Confirmed"
    assert root.find("ch:PersonsWithSignificantControl", NS) is None


def test_body_is_a_fragment_without_declaration() -> None:
    assert not generate_confirmation_statement_body(confirmation_statement()).startswith("<?xml")
