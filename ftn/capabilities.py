from __future__ import annotations

import abc
from typing import Any, Dict


class Serializable(abc.ABC):
    """
    Opt-in capability for types that can be turned into plain dicts.

    Types declare the capability by subclassing; nothing is inferred from
    attribute names. `has_serialize(x)` is then a plain isinstance check.
    """

    @abc.abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict of the object's fields."""

    @classmethod
    @abc.abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Serializable":
        """Rebuild an instance from `to_dict()` output."""


def has_serialize(obj: Any) -> bool:
    """True if `obj` (an instance or a class) declares the Serializable capability."""
    if isinstance(obj, type):
        return issubclass(obj, Serializable)
    return isinstance(obj, Serializable)
