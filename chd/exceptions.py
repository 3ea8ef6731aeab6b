"""Custom exception hierarchy for the codepoint dumper."""

from __future__ import annotations


class ChdError(Exception):
    """Base class for all dumper related errors."""


class ConfigError(ChdError):
    """Raised when an option value is malformed or out of range."""


class ConversionStateError(ChdError):
    """Raised when a finalized conversion state is used again."""


__all__ = ["ChdError", "ConfigError", "ConversionStateError"]
