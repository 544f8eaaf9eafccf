"""Base classes and utilities for bank dialect extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..types import ExtractedFields, TransactionNarrative


class DialectExtractor(ABC):
    """Abstract base for bank-specific narrative extractors."""

    name: str = "generic"

    @abstractmethod
    def accepts(self, raw_text: str) -> bool:
        """Return True if the raw MT940 message belongs to this bank's dialect."""

    @abstractmethod
    def contra_account_number(self, narrative: TransactionNarrative) -> str | None:
        """Return the counterparty account number, if any."""

    @abstractmethod
    def contra_account_name(self, narrative: TransactionNarrative) -> str | None:
        """Return the counterparty name, if any."""

    @abstractmethod
    def description(self, text: str | None) -> str:
        """Return a cleaned free-text description."""

    def extract(self, narrative: TransactionNarrative) -> ExtractedFields:
        return ExtractedFields(
            contra_account_number=self.contra_account_number(narrative),
            contra_account_name=self.contra_account_name(narrative),
            description=self.description(narrative.description_block),
        )


@dataclass(frozen=True)
class RegistrationResult:
    """Details about a dialect registration attempt."""

    name: str
    became_primary: bool
    replaced_existing: bool


class DialectRegistry:
    """Registry of dialect extractors, tried in registration order."""

    def __init__(self, extractors: Iterable[type[DialectExtractor]]) -> None:
        self._entries_by_name: dict[str, list[type[DialectExtractor]]] = {}
        self._order: list[str] = []
        for extractor in extractors:
            self.register(extractor)

    def detect(
        self,
        raw_text: str,
        allowed_names: Sequence[str] | None = None,
    ) -> DialectExtractor | None:
        allowed = {name.lower() for name in allowed_names} if allowed_names is not None else None
        for extractor_cls in self.iter_types(include_alternates=True):
            if allowed is not None and extractor_cls.name.lower() not in allowed:
                continue
            extractor = extractor_cls()
            if extractor.accepts(raw_text):
                return extractor
        return None

    def get(self, name: str) -> DialectExtractor | None:
        """Instantiate the primary extractor registered under ``name``."""

        bucket = self._entries_by_name.get(name.lower())
        if not bucket:
            return None
        return bucket[0]()

    def register(
        self,
        extractor: type[DialectExtractor],
        *,
        allow_override: bool = False,
    ) -> RegistrationResult:
        name = extractor.name
        key = name.lower()
        bucket = self._entries_by_name.setdefault(key, [])

        if not bucket:
            bucket.append(extractor)
            self._order.append(key)
            return RegistrationResult(name=name, became_primary=True, replaced_existing=False)

        if allow_override:
            bucket.insert(0, extractor)
            return RegistrationResult(name=name, became_primary=True, replaced_existing=True)

        bucket.append(extractor)
        return RegistrationResult(name=name, became_primary=False, replaced_existing=False)

    def names(self) -> tuple[str, ...]:
        names: list[str] = []
        for key in self._order:
            bucket = self._entries_by_name.get(key)
            if not bucket:
                continue
            names.append(bucket[0].name)
        return tuple(names)

    def iter_types(
        self,
        *,
        include_alternates: bool = False,
    ) -> Iterable[type[DialectExtractor]]:
        for key in self._order:
            bucket = self._entries_by_name.get(key, [])
            if not bucket:
                continue
            if include_alternates:
                for extractor in bucket:
                    yield extractor
            else:
                yield bucket[0]
