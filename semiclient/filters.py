"""Where filters and their GraphQL serialization.

A filter is a tree of ``WhereOperands`` (And/Or/Not) whose leaves are
``WhereFilter`` comparisons. The value key of a leaf (``valueInt``,
``valueString``, ...) is picked from the runtime type of its value.

Example:
    >>> serialize_where(WhereFilter(["wordCount"], "GreaterThanEqual", 50))
    '{operator: GreaterThanEqual, path: ["wordCount"], valueInt: 50}'
"""

import datetime
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from .exceptions import UsageError
from .literals import render_number, render_object, render_string, render_string_list

COMPARATORS = frozenset(
    {
        "Equal",
        "NotEqual",
        "GreaterThan",
        "GreaterThanEqual",
        "LessThan",
        "LessThanEqual",
        "Like",
        "WithinGeoRange",
    }
)
COMBINATORS = frozenset({"And", "Or", "Not"})


class Date(str):
    """An RFC 3339 timestamp string, sent as ``valueDate``."""


@dataclass(frozen=True)
class GeoRange:
    latitude: float
    longitude: float
    max_distance: float


@dataclass(frozen=True)
class WhereFilter:
    path: Sequence[str]
    operator: str
    value: Any

    def __post_init__(self) -> None:
        if isinstance(self.path, str):
            object.__setattr__(self, "path", (self.path,))
        else:
            object.__setattr__(self, "path", tuple(self.path))


@dataclass(frozen=True)
class WhereOperands:
    operator: str
    operands: Sequence["FilterNode"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "operands", tuple(self.operands))


FilterNode = Union[WhereFilter, WhereOperands]


def value_key(value: Any) -> str:
    """Name of the argument carrying ``value``."""
    # bool before int, datetime/Date before str
    if isinstance(value, bool):
        return "valueBoolean"
    if isinstance(value, int):
        return "valueInt"
    if isinstance(value, float):
        return "valueNumber"
    if isinstance(value, (Date, datetime.date)):
        return "valueDate"
    if isinstance(value, str):
        return "valueString"
    if isinstance(value, GeoRange):
        return "valueGeoRange"
    raise UsageError(f"unsupported where filter value {value!r} of type {type(value).__name__}")


def _render_date(value: Date | datetime.date) -> str:
    if isinstance(value, Date):
        return render_string(value)
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return render_string(value.isoformat() + "Z")
        return render_string(value.isoformat())
    return render_string(f"{value.isoformat()}T00:00:00Z")


def render_value(value: Any) -> str:
    key = value_key(value)
    if key == "valueBoolean":
        return "true" if value else "false"
    if key in ("valueInt", "valueNumber"):
        return render_number(value)
    if key == "valueDate":
        return _render_date(value)
    if key == "valueString":
        return render_string(value)
    return render_object(
        [
            (
                "geoCoordinates",
                render_object(
                    [
                        ("latitude", render_number(value.latitude)),
                        ("longitude", render_number(value.longitude)),
                    ]
                ),
            ),
            ("distance", render_object([("max", render_number(value.max_distance))])),
        ]
    )


def _check_operator(operator: Any, allowed: frozenset[str]) -> None:
    if not isinstance(operator, str) or operator not in allowed:
        raise UsageError(f"unsupported where operator {operator!r}, must be one of {', '.join(sorted(allowed))}")


def serialize_where(node: FilterNode) -> str:
    """Render a filter tree as a GraphQL input object."""
    if isinstance(node, WhereOperands):
        _check_operator(node.operator, COMBINATORS)
        if not node.operands:
            raise UsageError(f"operator {node.operator} needs at least one operand")
        if node.operator == "Not" and len(node.operands) != 1:
            raise UsageError(f"operator Not takes exactly one operand, got {len(node.operands)}")
        operands = ", ".join(serialize_where(operand) for operand in node.operands)
        return render_object([("operator", node.operator), ("operands", f"[{operands}]")])

    if isinstance(node, WhereFilter):
        _check_operator(node.operator, COMPARATORS)
        if not node.path or not all(isinstance(p, str) and p for p in node.path):
            raise UsageError(f"where filter path must be a non-empty list of property names, got {list(node.path)!r}")
        key = value_key(node.value)
        if (node.operator == "WithinGeoRange") != (key == "valueGeoRange"):
            raise UsageError(f"operator {node.operator} cannot be used with {key}")
        return render_object(
            [
                ("operator", node.operator),
                ("path", render_string_list(node.path)),
                (key, render_value(node.value)),
            ]
        )

    raise UsageError(f"where filter must be a WhereFilter or WhereOperands, got {type(node).__name__}")


def _geo_range(value: Any) -> GeoRange:
    if isinstance(value, GeoRange):
        return value
    try:
        coordinates = value["geoCoordinates"]
        return GeoRange(
            latitude=coordinates["latitude"],
            longitude=coordinates["longitude"],
            max_distance=value["distance"]["max"],
        )
    except (KeyError, TypeError):
        raise UsageError(f"valueGeoRange must have geoCoordinates and distance, got {value!r}")


def _coerce(key: str, value: Any) -> Any:
    """Check a tagged value from the mapping form against its tag."""
    if key == "valueInt" and isinstance(value, int) and not isinstance(value, bool):
        return value
    if key == "valueNumber" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if key == "valueString" and isinstance(value, str):
        return value
    if key == "valueBoolean" and isinstance(value, bool):
        return value
    if key == "valueDate":
        if isinstance(value, datetime.date):
            return value
        if isinstance(value, str):
            return Date(value)
    if key == "valueGeoRange":
        return _geo_range(value)
    if key not in ("valueInt", "valueNumber", "valueString", "valueBoolean", "valueDate"):
        raise UsageError(f"unknown where filter value key {key!r}")
    raise UsageError(f"{key} does not accept {value!r} of type {type(value).__name__}")


def parse_where(source: FilterNode | Mapping[str, Any]) -> FilterNode:
    """Turn the mapping form into a filter tree.

    Accepts ``{"operator": ..., "path": [...], "valueInt": 50}`` leaves and
    ``{"operator": "And", "operands": [...]}`` combinators, nested freely.
    Trees are returned unchanged.
    """
    if isinstance(source, (WhereFilter, WhereOperands)):
        return source
    if not isinstance(source, Mapping):
        raise UsageError(f"where filter must be a mapping, got {type(source).__name__}")

    operator = source.get("operator")
    if not operator:
        raise UsageError("where filter must have an operator")

    if "operands" in source:
        operands = source["operands"]
        if isinstance(operands, (str, bytes)) or not isinstance(operands, Sequence):
            raise UsageError(f"operands must be a list, got {type(operands).__name__}")
        return WhereOperands(operator, tuple(parse_where(operand) for operand in operands))

    keys = [key for key in source if isinstance(key, str) and key.startswith("value")]
    if len(keys) != 1:
        raise UsageError(f"where filter must have exactly one value key, got {keys}")
    path = source.get("path")
    if not isinstance(path, (str, list, tuple)):
        raise UsageError(f"where filter path must be a list of property names, got {path!r}")
    return WhereFilter(path=path, operator=operator, value=_coerce(keys[0], source[keys[0]]))
