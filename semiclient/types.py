"""Type definitions for semiclient."""

from dataclasses import dataclass, field
from typing import Any, Callable

from .kinds import DEFAULT_KIND, Kind, validate_kind


@dataclass(frozen=True)
class Request:
    """A fully validated request, ready to hand to a transport.

    ``path`` is relative to the API prefix and may carry a query string.
    ``parse`` post-processes the decoded response body.
    """

    method: str
    path: str
    body: Any = None
    parse: Callable[[Any], Any] | None = None


@dataclass
class DataObject:
    """A thing or action as returned by the REST surface."""

    class_name: str
    kind: Kind = DEFAULT_KIND
    id: str | None = None
    schema: dict[str, Any] = field(default_factory=dict)
    vector: list[float] | None = None
    classification: dict[str, Any] | None = None
    interpretation: dict[str, Any] | None = None
    nearest_neighbors: dict[str, Any] | None = None
    feature_projection: dict[str, Any] | None = None

    @classmethod
    def from_response(cls, response: dict[str, Any], kind: Kind | str = DEFAULT_KIND) -> "DataObject":
        """Create DataObject from a REST response body."""
        return cls(
            class_name=response.get("class", ""),
            kind=validate_kind(kind),
            id=response.get("id"),
            schema=response.get("schema") or {},
            vector=response.get("_vector"),
            classification=response.get("_classification"),
            interpretation=response.get("_interpretation"),
            nearest_neighbors=response.get("_nearestNeighbors"),
            feature_projection=response.get("_featureProjection"),
        )

    def to_payload(self) -> dict[str, Any]:
        """Request body for create, update and merge."""
        payload: dict[str, Any] = {"class": self.class_name, "schema": self.schema}
        if self.id is not None:
            payload["id"] = self.id
        return payload
