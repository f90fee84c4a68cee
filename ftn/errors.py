from __future__ import annotations


class FTNError(Exception):
    """Base class for Fruit Tree Navigation errors."""


class InvalidConfiguration(FTNError, ValueError):
    """Raised at construction time for an unsupported tree depth or step budget."""


class InvalidState(FTNError, ValueError):
    """Raised when a state does not address a node of the configured tree."""
