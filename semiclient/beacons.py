"""Beacons: resolvable pointers used as the value of a cross-reference."""

from dataclasses import dataclass
from typing import Any

from .exceptions import UsageError
from .kinds import Kind, default_kind, validate_kind
from .validation import require, validate_all

DEFAULT_BEACON_TEMPLATE = "weaviate://localhost/{kind}/{id}"


@dataclass(frozen=True)
class BeaconFormat:
    """Renders a beacon from a ``str.format`` template with ``kind`` and ``id``."""

    template: str = DEFAULT_BEACON_TEMPLATE

    def render(self, kind: Kind, id: str) -> str:  # noqa: A002
        return self.template.format(kind=kind.value, id=id)


DEFAULT_BEACON_FORMAT = BeaconFormat()


def build_beacon(kind: Kind | str, id: str, fmt: BeaconFormat = DEFAULT_BEACON_FORMAT) -> str:  # noqa: A002
    return fmt.render(validate_kind(kind), id)


class ReferencePayloadBuilder:
    """Builds the ``{"beacon": ...}`` payload pointing at one target object.

    Example:
        >>> ReferencePayloadBuilder().with_id("abc").payload()
        {'beacon': 'weaviate://localhost/things/abc'}
    """

    def __init__(self, fmt: BeaconFormat = DEFAULT_BEACON_FORMAT):
        self.fmt = fmt
        self.kind = default_kind()
        self.id: str | None = None

    def with_id(self, id: str) -> "ReferencePayloadBuilder":  # noqa: A002
        self.id = id
        return self

    def with_kind(self, kind: Kind | str) -> "ReferencePayloadBuilder":
        self.kind = validate_kind(kind)
        return self

    def payload(self) -> dict[str, Any]:
        errors = validate_all(require(self.id, "id must be set - set with .with_id(id)"))
        if errors:
            raise UsageError(*errors)
        return {"beacon": self.fmt.render(self.kind, self.id)}
