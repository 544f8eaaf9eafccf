from __future__ import annotations

from mt940_cli.mt940_extract.narrative import (
    has_structured_marker,
    parse_structured_narrative,
    tokenize_narrative,
)
from mt940_cli.mt940_extract.types import StructuredFields

SEPA_DIRECT_DEBIT = (
    "SEPA INCASSO ALGEMEEN DOORLOPEND INCASSANT: NL12ZZZ123456780000\r\n"
    "NAAM: ENECO  MACHTIGING: 1234567  OMSCHRIJVING: Termijnbedrag juni\r\n"
    "IBAN: NL20INGB0001234567  KENMERK: 20130601-0001"
)


def test_parses_all_known_fields() -> None:
    fields = parse_structured_narrative(SEPA_DIRECT_DEBIT)

    assert fields == StructuredFields(
        account_name="ENECO",
        account_number="NL20INGB0001234567",
        description="Termijnbedrag juni",
        account_incasso="NL12ZZZ123456780000",
        machtiging="1234567",
        kenmerk="20130601-0001",
    )


def test_scenario_with_name_iban_and_description() -> None:
    block = "NAAM: Piet Jansen  IBAN: NL00ABNA0000000001\nOMSCHRIJVING: Invoice 42"

    fields = parse_structured_narrative(block)

    assert fields.account_name == "Piet Jansen"
    assert fields.account_number == "NL00ABNA0000000001"
    assert fields.description == "Invoice 42"
    assert fields.machtiging is None
    assert fields.as_dict() == {
        "account_name": "Piet Jansen",
        "account_number": "NL00ABNA0000000001",
        "description": "Invoice 42",
    }


def test_last_duplicate_key_wins() -> None:
    block = "NAAM: First Holder  NAAM: Second Holder  OMSCHRIJVING: Huur"

    assert parse_structured_narrative(block).account_name == "Second Holder"


def test_without_marker_returns_empty_fields() -> None:
    fields = parse_structured_narrative("NAAM: Piet Jansen  IBAN: NL00ABNA0000000001")

    assert fields.is_empty()
    assert fields.as_dict() == {}


def test_empty_and_missing_blocks() -> None:
    assert parse_structured_narrative("").is_empty()
    assert parse_structured_narrative(None).is_empty()
    assert not has_structured_marker(None)


def test_marker_detected_across_line_break() -> None:
    assert has_structured_marker("NAAM: X  OMSCHRIJVING:\r\n Huur")
    assert not has_structured_marker("OMSCHRIJVING:Huur")


def test_unknown_tokens_are_ignored() -> None:
    block = "BETAALAUTOMAAT  PASNR. 123  OMSCHRIJVING: Koffie"

    assert parse_structured_narrative(block).as_dict() == {"description": "Koffie"}


def test_tokenizer_strips_tabs_and_carriage_returns() -> None:
    tokens = tokenize_narrative("NAAM:\t A  B \r\n\r\n   C    D")

    assert tokens == ["NAAM: A", "B", "C", "D"]
