"""Exception hierarchy shared by the core and the OS shell."""
from __future__ import annotations


class WinstepError(RuntimeError):
    """Base class for failures reported to the user instead of crashing."""


class StatePersistError(WinstepError):
    """Raised when the cycle state file cannot be written."""


class ArgumentError(WinstepError):
    """Raised for invalid or missing command-line arguments."""


__all__ = ["ArgumentError", "StatePersistError", "WinstepError"]
