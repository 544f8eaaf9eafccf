"""Dataclasses describing transaction narratives and the fields pulled from them."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class TransactionNarrative:
    """The two text pieces a statement record yields for one transaction."""

    transaction_line: str | None = None
    description_block: str | None = None


@dataclass(frozen=True, slots=True)
class StructuredFields:
    """Key/value fields embedded after an ``OMSCHRIJVING:`` marker.

    The field set is closed. ``None`` means the key did not occur in the narrative.
    """

    account_name: str | None = None
    account_number: str | None = None
    description: str | None = None
    account_incasso: str | None = None
    machtiging: str | None = None
    kenmerk: str | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def as_dict(self) -> dict[str, str]:
        """Return only the keys that were present."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True, slots=True)
class ExtractedFields:
    """Counterparty and description facts derived from one narrative."""

    contra_account_number: str | None = None
    contra_account_name: str | None = None
    description: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)
