"""Parser for the key/value sub-language embedded in SEPA narratives.

Some statements carry the narrative as a run of ``KEY: value`` pairs laid out in
fixed-width columns, e.g.::

    SEPA INCASSO ALGEMEEN DOORLOPEND INCASSANT: NL12ZZZ123456780000
    NAAM: ENECO  MACHTIGING: 1234567  OMSCHRIJVING: Termijnbedrag juni
    IBAN: NL20INGB0001234567  KENMERK: 20130601-0001

Columns are separated by two or more spaces. The block is only treated this way
when it contains an ``OMSCHRIJVING:`` marker.
"""

from __future__ import annotations

import re

from .types import StructuredFields

_MARKER_RE = re.compile(r"OMSCHRIJVING:\s")

# Longest prefixes first; a token matches at most one entry.
_PREFIXES: tuple[tuple[str, str], ...] = (
    ("NAAM: ", "account_name"),
    ("SEPA INCASSO ALGEMEEN DOORLOPEND INCASSANT: ", "account_incasso"),
    ("MACHTIGING: ", "machtiging"),
    ("OMSCHRIJVING: ", "description"),
    ("IBAN: ", "account_number"),
    ("KENMERK: ", "kenmerk"),
)

_TOKEN_SEPARATOR = "  "


def single_line(text: str) -> str:
    """Return ``text`` with all CR and LF characters removed."""
    return text.replace("\r", "").replace("\n", "")


def has_structured_marker(block: str | None) -> bool:
    if not block:
        return False
    return _MARKER_RE.search(single_line(block)) is not None


def tokenize_narrative(block: str) -> list[str]:
    """Split a narrative into trimmed, non-empty column tokens in reading order."""
    cleaned = block.replace("\r", "").replace("\t", "")
    tokens: list[str] = []
    for line in cleaned.split("\n"):
        for segment in line.split(_TOKEN_SEPARATOR):
            segment = segment.strip()
            if segment:
                tokens.append(segment)
    return tokens


def parse_structured_narrative(block: str | None) -> StructuredFields:
    """Extract the known ``KEY: value`` fields from a narrative block.

    Returns an empty ``StructuredFields`` when the block has no ``OMSCHRIJVING:``
    marker. When a key occurs more than once the last occurrence wins.
    """

    if not has_structured_marker(block):
        return StructuredFields()

    values: dict[str, str] = {}
    for token in tokenize_narrative(block or ""):
        for prefix, field_name in _PREFIXES:
            if token.startswith(prefix):
                value = token[len(prefix):]
                if field_name == "description":
                    value = value.strip()
                values[field_name] = value
                break
    return StructuredFields(**values)
