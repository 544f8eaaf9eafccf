"""ABN AMRO MT940 narrative extractor.

ABN AMRO mixes three conventions in the ``:86:`` narrative of a transaction:

* a fixed-width layout where the first line starts with the counterparty account
  (``123.456.789.01 `` or ``GIRO  1234567 ``) and the name fills the rest of a
  32 character column,
* SWIFT style tags such as ``/IBAN/.../NAME/.../REMI/.../``,
* the ``KEY: value`` SEPA sub-language handled by :mod:`..narrative`.

Rules for each field are tried in order and the first hit wins.
"""

from __future__ import annotations

import re
from typing import Callable

from ..narrative import parse_structured_narrative, single_line
from ..types import TransactionNarrative
from .base import DialectExtractor

SENDER_PREFIX = "ABNANL"

# The REMI rule searches the CR/LF-stripped text so a tag wrapped over two
# physical lines is still found. Marker removal works on the original text.
NORMALIZE_LINES_BEFORE_REMI = True

# Width of one column in the fixed-width narrative layout. Offsets are str indices.
COLUMN_WIDTH = 32

_ACCOUNT_RE = re.compile(r"^([0-9.]{11,14}) ")
_GIRO_RE = re.compile(r"^GIRO([0-9 ]{9}) ")
_IBAN_TAG_RE = re.compile(r"/IBAN/(\w+)/", re.ASCII)

# A cleaned number never contains periods or whitespace. A rule whose match
# cleans down to nothing (e.g. "........... ") is treated as not matching.
_NUMBER_RULES: tuple[tuple[re.Pattern[str], Callable[[str], str]], ...] = (
    (_ACCOUNT_RE, lambda value: value.replace(".", "")),
    (_GIRO_RE, lambda value: value.replace(" ", "")),
    (_IBAN_TAG_RE, str.strip),
)

# Later rules override the offset found by earlier ones.
_NAME_OFFSET_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^([0-9.]{11,14}) (?P<remainder>.*)$"),
    re.compile(r"^GIRO([0-9 ]{9}) (?P<remainder>.*)$"),
)
_NAME_TAG_RE = re.compile(r"/NAME/([a-zA-Z0-9\s.]+)/")

_REMI_TAG_RE = re.compile(r"/REMI/([a-zA-Z0-9\s.-].+)/")
_CONTINUATION_MARKER_RE = re.compile(r">2[0-7]")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class AbnAmroExtractor(DialectExtractor):
    name = "abnamro"

    def accepts(self, raw_text: str) -> bool:
        return raw_text[: len(SENDER_PREFIX)] == SENDER_PREFIX

    def contra_account_number(self, narrative: TransactionNarrative) -> str | None:
        text = narrative.description_block
        if not text:
            return None

        for pattern, clean in _NUMBER_RULES:
            match = pattern.search(text)
            if match:
                number = clean(match.group(1))
                if number:
                    return number

        return parse_structured_narrative(text).account_number

    def contra_account_name(self, narrative: TransactionNarrative) -> str | None:
        """Return the counterparty name.

        When the first line starts with an account number the name sits right
        after it in the first 32 columns, or in columns 32-64 when that part is
        blank. Without a leading number the ``/NAME/`` tag and then the
        structured ``NAAM:`` field are used.
        """

        text = narrative.description_block
        if not text:
            return None

        line = _first_line(text)
        offset = _name_offset(line)

        if offset is None:
            match = _NAME_TAG_RE.search(single_line(text))
            if match:
                return match.group(1)
            return parse_structured_narrative(text).account_name

        name = line[offset:COLUMN_WIDTH].strip()
        if name:
            return name

        name = line[COLUMN_WIDTH : 2 * COLUMN_WIDTH].strip()
        if name:
            return name

        return None

    def description(self, text: str | None) -> str:
        if not text:
            return ""

        structured = parse_structured_narrative(text)
        if structured.description is not None:
            return structured.description

        searchable = single_line(text) if NORMALIZE_LINES_BEFORE_REMI else text
        match = _REMI_TAG_RE.search(searchable)
        if match:
            return match.group(1).split("/")[0]

        return _CONTINUATION_MARKER_RE.sub("", text)


def _first_line(text: str) -> str:
    return _LINE_BREAK_RE.split(text, maxsplit=1)[0]


def _name_offset(line: str) -> int | None:
    offset = None
    for pattern in _NAME_OFFSET_RULES:
        match = pattern.match(line)
        if match:
            offset = match.start("remainder")
    return offset
