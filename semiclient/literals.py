"""GraphQL literal rendering shared by the filter serializer and query assembler."""

import json
import math
from typing import Any, Iterable

from .exceptions import UsageError


def render_number(value: Any) -> str:
    """Render an int without a decimal point and a float as its ``repr``.

    ``1`` stays ``1`` while ``1.0`` stays ``1.0``; the query language types
    them differently.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UsageError(f"expected a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise UsageError(f"number must be finite, got {value!r}")
    if isinstance(value, int):
        return str(value)
    return repr(value)


def render_string(value: str) -> str:
    return json.dumps(value)


def render_string_list(values: Iterable[str]) -> str:
    return "[" + ", ".join(render_string(v) for v in values) + "]"


def render_object(entries: Iterable[tuple[str, str]]) -> str:
    """Render already-rendered ``(name, value)`` pairs as ``{name: value, ...}``."""
    return "{" + ", ".join(f"{name}: {value}" for name, value in entries) + "}"
