"""Exception types raised by protoclass."""

from __future__ import annotations


class ProtoclassError(Exception):
    """Base class for protoclass errors."""


class UnparseableSourceError(ProtoclassError):
    """Raised when a unit cannot be parsed without syntax errors."""
