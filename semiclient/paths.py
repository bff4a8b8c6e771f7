"""REST path assembly for object, reference and schema operations."""

from enum import Enum
from typing import Iterable
from urllib.parse import quote

from .kinds import Kind


class Operation(str, Enum):
    CREATE = "create"
    LIST = "list"
    VALIDATE = "validate"
    GET = "get"
    UPDATE = "update"
    MERGE = "merge"
    DELETE = "delete"
    REFERENCE_CREATE = "reference-create"
    REFERENCE_REPLACE = "reference-replace"
    REFERENCE_DELETE = "reference-delete"


METHODS = {
    Operation.CREATE: "POST",
    Operation.LIST: "GET",
    Operation.VALIDATE: "POST",
    Operation.GET: "GET",
    Operation.UPDATE: "PUT",
    Operation.MERGE: "PATCH",
    Operation.DELETE: "DELETE",
    Operation.REFERENCE_CREATE: "POST",
    Operation.REFERENCE_REPLACE: "PUT",
    Operation.REFERENCE_DELETE: "DELETE",
}

ID_ADDRESSED = {
    Operation.GET,
    Operation.UPDATE,
    Operation.MERGE,
    Operation.DELETE,
    Operation.REFERENCE_CREATE,
    Operation.REFERENCE_REPLACE,
    Operation.REFERENCE_DELETE,
}


class Include(str, Enum):
    """Enrichment fields that are only returned when asked for."""

    VECTOR = "vector"
    CLASSIFICATION = "classification"
    INTERPRETATION = "interpretation"
    NEAREST_NEIGHBORS = "nearestNeighbors"
    FEATURE_PROJECTION = "featureProjection"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def object_path(operation: Operation, kind: Kind, id: str | None = None) -> str:  # noqa: A002
    """Path for a data operation, e.g. ``/things`` or ``/actions/<id>``."""
    if operation == Operation.VALIDATE:
        return f"/{kind.value}/validate"
    if operation in ID_ADDRESSED:
        return f"/{kind.value}/{_segment(id)}"
    return f"/{kind.value}"


def reference_path(kind: Kind, id: str, property_name: str) -> str:  # noqa: A002
    return f"{object_path(Operation.GET, kind, id)}/references/{_segment(property_name)}"


def schema_path(kind: Kind | None = None, class_name: str | None = None) -> str:
    if kind is None:
        return "/schema"
    if class_name is None:
        return f"/schema/{kind.value}"
    return f"/schema/{kind.value}/{_segment(class_name)}"


def include_params(includes: Iterable[Include], limit: int | None = None) -> list[tuple[str, str]]:
    """Query parameters for a list/get request.

    ``includes`` is taken in order; duplicates keep their first position.
    """
    tokens = list(dict.fromkeys(Include(i).value for i in includes))
    params = []
    if tokens:
        params.append(("include", ",".join(tokens)))
    if limit is not None:
        params.append(("limit", str(limit)))
    return params


def with_query(path: str, params: list[tuple[str, str]]) -> str:
    """Append a query string, leaving commas in values unescaped."""
    if not params:
        return path
    query = "&".join(f"{key}={quote(value, safe=',')}" for key, value in params)
    return f"{path}?{query}"
