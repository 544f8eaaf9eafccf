"""Dialect autodetection utilities."""

from __future__ import annotations

from collections.abc import Iterable

from mt940_cli.shared.exceptions import UnsupportedFormatError

from .abnamro import AbnAmroExtractor
from .base import DialectExtractor, DialectRegistry

REGISTRY = DialectRegistry([AbnAmroExtractor])

__all__ = (
    "REGISTRY",
    "FRIENDLY_NAMES",
    "detect_dialect",
    "get_dialect",
)

FRIENDLY_NAMES: dict[str, str] = {
    "abnamro": "ABN AMRO",
}


def detect_dialect(
    raw_text: str,
    *,
    allowed_dialects: Iterable[str] | None = None,
) -> DialectExtractor:
    """Return the first registered dialect whose sniffer accepts ``raw_text``."""

    allowed = tuple(allowed_dialects) if allowed_dialects is not None else REGISTRY.names()
    extractor = REGISTRY.detect(raw_text, allowed_names=allowed)
    if extractor is not None:
        return extractor

    probable = REGISTRY.detect(raw_text)
    if probable is not None:
        raise UnsupportedFormatError(
            f"Detected {FRIENDLY_NAMES.get(probable.name, probable.name)} statement "
            "but support is disabled via configuration."
        )
    supported_list = ", ".join(
        FRIENDLY_NAMES.get(name.lower(), name) for name in sorted(name.lower() for name in allowed)
    )
    raise UnsupportedFormatError(
        "Unsupported statement format. Supported dialects: "
        f"{supported_list or 'none configured'}"
    )


def get_dialect(name: str) -> DialectExtractor:
    """Return the dialect registered under ``name`` without sniffing."""

    extractor = REGISTRY.get(name)
    if extractor is None:
        known = ", ".join(REGISTRY.names())
        raise UnsupportedFormatError(f"Unknown dialect '{name}'. Known dialects: {known}")
    return extractor

