"""Split a raw MT940 message into per-transaction narratives.

Only the ``:61:`` statement line and the ``:86:`` information block that follows
it are collected; balances and headers are skipped.
"""

from __future__ import annotations

import re

from .types import TransactionNarrative

_TAG_RE = re.compile(r"^:(\d{2}[A-Z]?):")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Continuation lines of a :86: block are re-joined with CRLF so the
# first-physical-line rules of the dialect extractors still apply.
DESCRIPTION_LINE_SEPARATOR = "\r\n"


def split_transactions(text: str) -> list[TransactionNarrative]:
    transactions: list[TransactionNarrative] = []
    transaction_line: str | None = None
    description_lines: list[str] | None = None
    collecting = False

    def flush() -> None:
        if transaction_line is None:
            return
        block = (
            DESCRIPTION_LINE_SEPARATOR.join(description_lines)
            if description_lines is not None
            else None
        )
        transactions.append(
            TransactionNarrative(transaction_line=transaction_line, description_block=block)
        )

    for line in _LINE_BREAK_RE.split(text):
        if not line.strip():
            continue
        if line.strip() == "-":
            collecting = False
            continue
        match = _TAG_RE.match(line)
        if match is None:
            if collecting and description_lines is not None:
                description_lines.append(line)
            continue

        tag = match.group(1)
        content = line[match.end():]
        if tag == "61":
            flush()
            transaction_line = content
            description_lines = None
            collecting = False
        elif tag == "86" and transaction_line is not None and description_lines is None:
            description_lines = [content]
            collecting = True
        else:
            collecting = False
            if tag in {"62F", "62M", "64", "65"}:
                flush()
                transaction_line = None
                description_lines = None

    flush()
    return transactions
