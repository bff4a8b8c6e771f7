"""Builders for object CRUD and cross-references over the REST surface."""

from typing import Any, Callable

from .kinds import Kind
from .paths import METHODS, Include, Operation, include_params, object_path, reference_path, with_query
from .types import DataObject, Request
from .validation import BuilderT, KindBuilder, Transport, check_limit, require, validate_all

CLASS_NAME_MISSING = "class_name must be set - set with .with_class_name(class_name)"
ID_MISSING = "id must be set - set with .with_id(id)"
SCHEMA_MISSING = "schema must be set - set with .with_schema(schema)"
REFERENCE_PROPERTY_MISSING = "reference property must be set - set with .with_reference_property(property)"
REFERENCE_MISSING = "reference must be set - set with .with_reference(reference)"
REFERENCES_MISSING = "references must be set - set with .with_references(references)"


def object_parser(kind: Kind) -> Callable[[Any], DataObject | None]:
    """Parse hook turning a single-object body into a DataObject.

    Empty bodies (e.g. 204 on merge) parse to None.
    """

    def parse(body: Any) -> DataObject | None:
        if not body:
            return None
        return DataObject.from_response(body, kind)

    return parse


def list_parser(kind: Kind) -> Callable[[Any], list[DataObject]]:
    """Parse hook for a list body such as ``{"things": [...], "totalResults": 2}``."""

    def parse(body: Any) -> list[DataObject]:
        if not body:
            return []
        return [DataObject.from_response(item, kind) for item in body.get(kind.value) or []]

    return parse


class _ObjectBuilder(KindBuilder):
    """Shared configuration for builders that send an object body."""

    operation: Operation

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.class_name: str | None = None
        self.id: str | None = None
        self.schema: dict[str, Any] | None = None

    def with_class_name(self: BuilderT, class_name: str) -> BuilderT:
        """Set the class the object belongs to.

        Args:
            class_name: Class name from the schema, e.g. "Article".
        """
        self.class_name = class_name
        return self

    def with_id(self: BuilderT, id: str) -> BuilderT:  # noqa: A002
        """Set the object's UUID."""
        self.id = id
        return self

    def with_schema(self: BuilderT, schema: dict[str, Any]) -> BuilderT:
        """Set the object's property values.

        Args:
            schema: Property name to value. An empty dict is a valid schema.
        """
        self.schema = schema
        return self

    def _object(self) -> DataObject:
        return DataObject(class_name=self.class_name, kind=self.kind, id=self.id, schema=self.schema or {})

    def _request(self) -> Request:
        return Request(
            METHODS[self.operation],
            object_path(self.operation, self.kind, self.id),
            body=self._object().to_payload(),
            parse=object_parser(self.kind),
        )


class Creator(_ObjectBuilder):
    """Create a thing or action; the server assigns an id unless one is set.

    ``do()`` returns the stored object as a DataObject.

    Example:
        >>> client.data.creator().with_class_name("Article").with_schema({"title": "x"}).do()
    """

    operation = Operation.CREATE

    def validate(self) -> list[str]:
        return validate_all(require(self.class_name, CLASS_NAME_MISSING))


class Validator(_ObjectBuilder):
    """Ask the server whether an object would be accepted, without storing it.

    ``do()`` returns True; an invalid object surfaces as a ServerError.
    """

    operation = Operation.VALIDATE

    def validate(self) -> list[str]:
        return validate_all(require(self.class_name, CLASS_NAME_MISSING))

    def _request(self) -> Request:
        request = super()._request()
        return Request(request.method, request.path, body=request.body, parse=lambda _: True)


class Updater(_ObjectBuilder):
    """Replace an object's schema entirely."""

    operation = Operation.UPDATE

    def validate(self) -> list[str]:
        return validate_all(
            require(self.id, ID_MISSING),
            require(self.class_name, CLASS_NAME_MISSING),
            lambda: None if self.schema is not None else SCHEMA_MISSING,
        )


class Merger(Updater):
    """Merge the given properties into an existing object."""

    operation = Operation.MERGE


class Deleter(KindBuilder):
    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.id: str | None = None

    def with_id(self, id: str) -> "Deleter":  # noqa: A002
        self.id = id
        return self

    def validate(self) -> list[str]:
        return validate_all(require(self.id, ID_MISSING))

    def _request(self) -> Request:
        return Request("DELETE", object_path(Operation.DELETE, self.kind, self.id))


class _IncludeBuilder(KindBuilder):
    """Enrichment toggles shared by the list and get-by-id builders.

    Each toggle adds its token to ``include=`` once, in the order enabled.
    """

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.includes: list[Include] = []

    def _include(self: BuilderT, include: Include) -> BuilderT:
        if include not in self.includes:
            self.includes.append(include)
        return self

    def with_vector(self: BuilderT) -> BuilderT:
        return self._include(Include.VECTOR)

    def with_classification(self: BuilderT) -> BuilderT:
        return self._include(Include.CLASSIFICATION)

    def with_interpretation(self: BuilderT) -> BuilderT:
        return self._include(Include.INTERPRETATION)

    def with_nearest_neighbors(self: BuilderT) -> BuilderT:
        return self._include(Include.NEAREST_NEIGHBORS)

    def with_feature_projection(self: BuilderT) -> BuilderT:
        return self._include(Include.FEATURE_PROJECTION)


class Getter(_IncludeBuilder):
    """List things or actions.

    ``do()`` returns a list of DataObject.

    Example:
        >>> client.data.getter().with_vector().with_classification().with_limit(2).build().path
        '/things?include=vector,classification&limit=2'
    """

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.limit: int | None = None

    def with_limit(self, limit: int) -> "Getter":
        """Cap the number of objects returned.

        Args:
            limit: Positive integer. Anything else is reported by ``build()``.
        """
        self._record(check_limit(limit))
        self.limit = limit
        return self

    def _request(self) -> Request:
        path = object_path(Operation.LIST, self.kind)
        return Request(
            "GET",
            with_query(path, include_params(self.includes, self.limit)),
            parse=list_parser(self.kind),
        )


class GetterById(_IncludeBuilder):
    """Fetch one object; ``do()`` returns a DataObject."""

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.id: str | None = None

    def with_id(self, id: str) -> "GetterById":  # noqa: A002
        self.id = id
        return self

    def validate(self) -> list[str]:
        return validate_all(require(self.id, ID_MISSING))

    def _request(self) -> Request:
        path = object_path(Operation.GET, self.kind, self.id)
        return Request("GET", with_query(path, include_params(self.includes)), parse=object_parser(self.kind))


class _ReferenceBuilder(KindBuilder):
    operation: Operation

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.id: str | None = None
        self.reference_property: str | None = None

    def with_id(self: BuilderT, id: str) -> BuilderT:  # noqa: A002
        """Set the id of the object holding the reference property."""
        self.id = id
        return self

    def with_reference_property(self: BuilderT, reference_property: str) -> BuilderT:
        self.reference_property = reference_property
        return self

    def _checks(self) -> list:
        return [
            require(self.id, ID_MISSING),
            require(self.reference_property, REFERENCE_PROPERTY_MISSING),
        ]

    def _body(self) -> Any:
        raise NotImplementedError

    def _request(self) -> Request:
        return Request(
            METHODS[self.operation],
            reference_path(self.kind, self.id, self.reference_property),
            body=self._body(),
        )


class ReferenceCreator(_ReferenceBuilder):
    """Add one reference to a reference property.

    The reference is a beacon payload from ReferencePayloadBuilder.
    """

    operation = Operation.REFERENCE_CREATE

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.reference: dict[str, Any] | None = None

    def with_reference(self: BuilderT, reference: dict[str, Any]) -> BuilderT:
        """Set the reference to add or remove.

        Args:
            reference: Beacon payload, e.g. ``{"beacon": "weaviate://localhost/things/<id>"}``.
        """
        self.reference = reference
        return self

    def validate(self) -> list[str]:
        return validate_all(*self._checks(), require(self.reference, REFERENCE_MISSING))

    def _body(self) -> Any:
        return self.reference


class ReferenceDeleter(ReferenceCreator):
    """Remove one reference from a reference property."""

    operation = Operation.REFERENCE_DELETE


class ReferenceReplacer(_ReferenceBuilder):
    """Replace every reference of a property; an empty list clears it."""

    operation = Operation.REFERENCE_REPLACE

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.references: list[dict[str, Any]] | None = None

    def with_references(self, references: list[dict[str, Any]]) -> "ReferenceReplacer":
        self.references = references
        return self

    def validate(self) -> list[str]:
        return validate_all(
            *self._checks(),
            lambda: None if isinstance(self.references, (list, tuple)) else REFERENCES_MISSING,
        )

    def _body(self) -> Any:
        return self.references
