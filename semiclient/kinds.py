"""The two parallel object categories every data operation addresses."""

from enum import Enum
from typing import Any

from .exceptions import UsageError


class Kind(str, Enum):
    THINGS = "things"
    ACTIONS = "actions"

    @property
    def graphql_name(self) -> str:
        """Capitalized form used inside GraphQL queries, e.g. ``Things``."""
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.value


KIND_THINGS = Kind.THINGS
KIND_ACTIONS = Kind.ACTIONS
DEFAULT_KIND = KIND_THINGS


def default_kind() -> Kind:
    return DEFAULT_KIND


def validate_kind(value: Any) -> Kind:
    """Return the Kind for ``value`` or raise UsageError.

    Accepts a Kind member or one of the exact strings ``"things"`` and
    ``"actions"``. Matching is case-sensitive.
    """
    if isinstance(value, Kind):
        return value
    if isinstance(value, str):
        for kind in Kind:
            if kind.value == value:
                return kind
    valid = ", ".join(kind.value for kind in Kind)
    raise UsageError(f"invalid kind {value!r} - must be one of {valid}")
