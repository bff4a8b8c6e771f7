"""GraphQL query assembly for Get, Aggregate and Explore."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from .exceptions import UsageError
from .filters import FilterNode, serialize_where
from .kinds import DEFAULT_KIND, Kind, validate_kind
from .literals import render_number, render_object, render_string_list

GROUP_TYPES = ("closest", "merge")


class Mode(str, Enum):
    GET = "Get"
    AGGREGATE = "Aggregate"
    EXPLORE = "Explore"


@dataclass(frozen=True)
class Movement:
    """Shift the search towards (or away from) ``concepts`` by ``force``."""

    concepts: Sequence[str]
    force: float

    def render(self) -> str:
        return render_object([("concepts", render_string_list(self.concepts)), ("force", render_number(self.force))])


@dataclass(frozen=True)
class ExploreParams:
    concepts: Sequence[str]
    certainty: float | None = None
    move_to: Movement | None = None
    move_away_from: Movement | None = None

    def entries(self) -> list[tuple[str, str]]:
        if not self.concepts:
            raise UsageError("concepts must not be empty")
        entries = [("concepts", render_string_list(self.concepts))]
        if self.certainty is not None:
            entries.append(("certainty", render_number(self.certainty)))
        if self.move_to is not None:
            entries.append(("moveTo", self.move_to.render()))
        if self.move_away_from is not None:
            entries.append(("moveAwayFrom", self.move_away_from.render()))
        return entries

    def render(self) -> str:
        return render_object(self.entries())


@dataclass(frozen=True)
class Group:
    type: str
    force: float

    def render(self) -> str:
        if self.type not in GROUP_TYPES:
            raise UsageError(f"group type must be one of {', '.join(GROUP_TYPES)}, got {self.type!r}")
        return render_object([("type", self.type), ("force", render_number(self.force))])


@dataclass(frozen=True)
class QueryRequest:
    mode: Mode
    fields: str
    class_name: str | None = None
    kind: Kind = DEFAULT_KIND
    where: FilterNode | None = None
    limit: int | None = None
    explore: ExploreParams | None = None
    group: Group | None = None
    group_by: Sequence[str] | None = None

    def options(self) -> dict[str, Any]:
        return {
            "where": self.where,
            "limit": self.limit,
            "explore": self.explore,
            "group": self.group,
            "group_by": self.group_by,
        }


# Options each mode understands; anything else set on a request is an error.
SUPPORTED_OPTIONS = {
    Mode.GET: {"where", "explore", "group", "limit"},
    Mode.AGGREGATE: {"where", "group_by", "limit"},
    Mode.EXPLORE: {"explore", "limit"},
}


def _check_request(request: QueryRequest) -> None:
    mode = Mode(request.mode)
    unsupported = [
        name for name, value in request.options().items()
        if value is not None and name not in SUPPORTED_OPTIONS[mode]
    ]
    if unsupported:
        raise UsageError(f"{', '.join(unsupported)} cannot be used with {mode.value}")
    if not request.fields:
        raise UsageError("fields must be set")
    if mode == Mode.EXPLORE:
        if request.explore is None or not request.explore.concepts:
            raise UsageError("concepts must not be empty")
    elif not request.class_name:
        raise UsageError("class_name must be set")


def _arguments(request: QueryRequest) -> str:
    args: list[tuple[str, str]] = []
    if request.mode == Mode.EXPLORE:
        args.extend(request.explore.entries())
    if request.where is not None:
        args.append(("where", serialize_where(request.where)))
    if request.mode == Mode.GET and request.explore is not None:
        args.append(("explore", request.explore.render()))
    if request.group is not None:
        args.append(("group", request.group.render()))
    if request.group_by is not None:
        args.append(("groupBy", render_string_list(request.group_by)))
    if request.limit is not None:
        args.append(("limit", render_number(request.limit)))
    if not args:
        return ""
    return "(" + ", ".join(f"{name}: {value}" for name, value in args) + ")"


def assemble(request: QueryRequest) -> str:
    """Render ``request`` as a GraphQL query string.

    Example:
        >>> assemble(QueryRequest(Mode.GET, "title", class_name="Article", limit=7))
        '{Get{Things{Article(limit: 7){title}}}}'
    """
    _check_request(request)
    mode = Mode(request.mode)
    args = _arguments(request)
    if mode == Mode.EXPLORE:
        return f"{{Explore{args}{{{request.fields}}}}}"
    kind = validate_kind(request.kind)
    return f"{{{mode.value}{{{kind.graphql_name}{{{request.class_name}{args}{{{request.fields}}}}}}}}}"
