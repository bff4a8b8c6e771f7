"""Builders for the GraphQL surface: Get, Aggregate and Explore."""

from typing import Any, Callable, Mapping, Sequence

from .exceptions import ServerError, UsageError
from .filters import FilterNode, parse_where, serialize_where
from .query import GROUP_TYPES, ExploreParams, Group, Mode, Movement, QueryRequest, assemble
from .types import Request
from .validation import Builder, BuilderT, KindBuilder, Transport, check_fraction, check_limit, require, validate_all

GRAPHQL_PATH = "/graphql"

CLASS_NAME_MISSING = "class_name must be set - set with .with_class_name(class_name)"
FIELDS_MISSING = "fields must be set - set with .with_fields(fields)"
CONCEPTS_MISSING = "concepts must be set - set with .with_concepts(concepts)"


def check_errors(body: Any) -> Any:
    """Raise on a GraphQL error list even though the status was 200."""
    if isinstance(body, dict) and body.get("errors"):
        raise ServerError(200, body)
    return body


def query_request(query: str) -> Request:
    return Request("POST", GRAPHQL_PATH, body={"query": query}, parse=check_errors)


def _concepts(value: Any, name: str) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Sequence) or not all(isinstance(c, str) for c in value):
        raise UsageError(f"{name} must be a list of strings, got {value!r}")
    if not value:
        raise UsageError(f"{name} must not be empty")
    return list(value)


def to_movement(value: Movement | Mapping[str, Any], name: str) -> Movement:
    if isinstance(value, Mapping):
        value = Movement(concepts=value.get("concepts"), force=value.get("force"))
    if not isinstance(value, Movement):
        raise UsageError(f"{name} must be a mapping with concepts and force, got {value!r}")
    errors = []
    try:
        _concepts(value.concepts, f"{name}.concepts")
    except UsageError as e:
        errors.extend(e.reasons)
    force_error = check_fraction(f"{name}.force", value.force)
    if force_error:
        errors.append(force_error)
    if errors:
        raise UsageError(*errors)
    return Movement(concepts=tuple(value.concepts), force=value.force)


def to_explore(value: ExploreParams | Mapping[str, Any]) -> ExploreParams:
    """Accepts ExploreParams or ``{concepts, certainty, moveTo, moveAwayFrom}``."""
    if isinstance(value, Mapping):
        value = ExploreParams(
            concepts=value.get("concepts"),
            certainty=value.get("certainty"),
            move_to=value.get("moveTo"),
            move_away_from=value.get("moveAwayFrom"),
        )
    if not isinstance(value, ExploreParams):
        raise UsageError(f"explore must be a mapping with concepts, got {value!r}")
    errors = []
    concepts: Sequence[str] = ()
    move_to = move_away_from = None
    try:
        concepts = tuple(_concepts(value.concepts, "explore.concepts"))
    except UsageError as e:
        errors.extend(e.reasons)
    if value.certainty is not None:
        certainty_error = check_fraction("certainty", value.certainty)
        if certainty_error:
            errors.append(certainty_error)
    for attr, name in (("move_to", "moveTo"), ("move_away_from", "moveAwayFrom")):
        movement = getattr(value, attr)
        if movement is None:
            continue
        try:
            movement = to_movement(movement, name)
        except UsageError as e:
            errors.extend(e.reasons)
        if attr == "move_to":
            move_to = movement
        else:
            move_away_from = movement
    if errors:
        raise UsageError(*errors)
    return ExploreParams(concepts, value.certainty, move_to, move_away_from)


def to_group(value: Group | Mapping[str, Any]) -> Group:
    if isinstance(value, Mapping):
        value = Group(type=value.get("type"), force=value.get("force"))
    if not isinstance(value, Group):
        raise UsageError(f"group must be a mapping with type and force, got {value!r}")
    errors = []
    if value.type not in GROUP_TYPES:
        errors.append(f"group type must be one of {', '.join(GROUP_TYPES)}, got {value.type!r}")
    force_error = check_fraction("group.force", value.force)
    if force_error:
        errors.append(force_error)
    if errors:
        raise UsageError(*errors)
    return value


class _QueryBuilder(Builder):
    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.fields: str | None = None
        self.limit: int | None = None

    def _convert(self, convert: Callable[[Any], Any], value: Any) -> Any:
        """Run ``convert`` and record its usage errors instead of raising."""
        try:
            return convert(value)
        except UsageError as e:
            self.errors.extend(e.reasons)
            return None

    def with_fields(self: BuilderT, fields: str) -> BuilderT:
        """Set the selection set, sent verbatim.

        Args:
            fields: GraphQL fields, e.g. ``"title url wordCount"``.
        """
        self.fields = fields
        return self

    def with_limit(self: BuilderT, limit: int) -> BuilderT:
        self._record(check_limit(limit))
        self.limit = limit
        return self

    def query_request(self) -> QueryRequest:
        raise NotImplementedError

    def _request(self) -> Request:
        return query_request(assemble(self.query_request()))


class _ClassQueryBuilder(KindBuilder, _QueryBuilder):
    """Queries addressing one class of things or actions."""

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.class_name: str | None = None
        self.where: FilterNode | None = None

    def with_class_name(self: BuilderT, class_name: str) -> BuilderT:
        self.class_name = class_name
        return self

    def with_where(self: BuilderT, where: FilterNode | Mapping[str, Any]) -> BuilderT:
        """Filter results.

        Args:
            where: A WhereFilter/WhereOperands tree or its mapping form.
                Malformed filters are reported by ``build()``.
        """
        node = self._convert(parse_where, where)
        if node is not None and self._convert(serialize_where, node) is not None:
            self.where = node
        return self

    def validate(self) -> list[str]:
        return validate_all(
            require(self.class_name, CLASS_NAME_MISSING),
            require(self.fields, FIELDS_MISSING),
        )


class Getter(_ClassQueryBuilder):
    """``Get`` query.

    Example:
        >>> client.graphql.get() \\
        ...     .with_class_name("Article") \\
        ...     .with_fields("title url wordCount") \\
        ...     .with_where({"operator": "GreaterThanEqual", "path": ["wordCount"], "valueInt": 50}) \\
        ...     .with_limit(7) \\
        ...     .do()
    """

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.explore: ExploreParams | None = None
        self.group: Group | None = None

    def with_explore(self, explore: ExploreParams | Mapping[str, Any]) -> "Getter":
        self.explore = self._convert(to_explore, explore)
        return self

    def with_group(self, group: Group | Mapping[str, Any]) -> "Getter":
        self.group = self._convert(to_group, group)
        return self

    def query_request(self) -> QueryRequest:
        return QueryRequest(
            Mode.GET,
            self.fields,
            class_name=self.class_name,
            kind=self.kind,
            where=self.where,
            limit=self.limit,
            explore=self.explore,
            group=self.group,
        )


class Aggregator(_ClassQueryBuilder):
    """``Aggregate`` query. Fields such as ``meta { count }`` are sent as given."""

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.group_by: list[str] | None = None

    def with_group_by(self, group_by: list[str]) -> "Aggregator":
        self.group_by = self._convert(lambda v: _concepts(v, "group_by"), group_by)
        return self

    def query_request(self) -> QueryRequest:
        return QueryRequest(
            Mode.AGGREGATE,
            self.fields,
            class_name=self.class_name,
            kind=self.kind,
            where=self.where,
            limit=self.limit,
            group_by=self.group_by,
        )


class Explorer(_QueryBuilder):
    """``Explore`` query across all classes, driven by concepts."""

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.concepts: list[str] | None = None
        self.certainty: float | None = None
        self.move_to: Movement | None = None
        self.move_away_from: Movement | None = None

    def with_concepts(self, concepts: list[str]) -> "Explorer":
        """Set the concepts to explore; required and non-empty."""
        self.concepts = concepts
        return self

    def with_certainty(self, certainty: float) -> "Explorer":
        self._record(check_fraction("certainty", certainty))
        self.certainty = certainty
        return self

    def with_move_to(self, move_to: Movement | Mapping[str, Any]) -> "Explorer":
        self.move_to = self._convert(lambda v: to_movement(v, "moveTo"), move_to)
        return self

    def with_move_away_from(self, move_away_from: Movement | Mapping[str, Any]) -> "Explorer":
        self.move_away_from = self._convert(lambda v: to_movement(v, "moveAwayFrom"), move_away_from)
        return self

    def validate(self) -> list[str]:
        checks = [require(self.concepts, CONCEPTS_MISSING), require(self.fields, FIELDS_MISSING)]
        if self.concepts:
            checks.append(self._concepts_error)
        return validate_all(*checks)

    def _concepts_error(self) -> str | None:
        try:
            _concepts(self.concepts, "concepts")
        except UsageError as e:
            return ", ".join(e.reasons)
        return None

    def query_request(self) -> QueryRequest:
        return QueryRequest(
            Mode.EXPLORE,
            self.fields,
            limit=self.limit,
            explore=ExploreParams(
                concepts=tuple(self.concepts),
                certainty=self.certainty,
                move_to=self.move_to,
                move_away_from=self.move_away_from,
            ),
        )
