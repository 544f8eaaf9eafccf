"""Project-wide custom exceptions."""

from __future__ import annotations


class Mt940Error(Exception):
    """Base exception for the MT940 CLI suite."""


class ConfigurationError(Mt940Error):
    """Raised when configuration loading or validation fails."""


class ExtractionError(Mt940Error):
    """Raised when a statement cannot be read or split."""


class UnsupportedFormatError(ExtractionError):
    """Raised when no registered bank dialect accepts a statement."""
