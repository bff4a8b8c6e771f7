"""Builders for schema management."""

from typing import Any

from .paths import schema_path
from .types import Request
from .validation import Builder, KindBuilder, Transport, require, validate_all

CLASS_MISSING = "class must be set - set with .with_class(class_obj)"
CLASS_NAME_MISSING = "class_name must be set - set with .with_class_name(class_name)"


class ClassCreator(KindBuilder):
    """Add a class definition to the things or actions schema.

    Example:
        >>> client.schema.class_creator().with_class({
        ...     "class": "Article",
        ...     "properties": [{"name": "title", "dataType": ["string"]}],
        ... }).do()
    """

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.class_obj: dict[str, Any] | None = None

    def with_class(self, class_obj: dict[str, Any]) -> "ClassCreator":
        """Set the class definition.

        Args:
            class_obj: Class definition with ``class`` and ``properties``,
                sent as the request body unchanged.
        """
        self.class_obj = class_obj
        return self

    def validate(self) -> list[str]:
        return validate_all(require(self.class_obj, CLASS_MISSING))

    def _request(self) -> Request:
        return Request("POST", schema_path(self.kind), body=self.class_obj)


class ClassDeleter(KindBuilder):
    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.class_name: str | None = None

    def with_class_name(self, class_name: str) -> "ClassDeleter":
        self.class_name = class_name
        return self

    def validate(self) -> list[str]:
        return validate_all(require(self.class_name, CLASS_NAME_MISSING))

    def _request(self) -> Request:
        return Request("DELETE", schema_path(self.kind, self.class_name))


class SchemaGetter(Builder):
    """Fetch the full schema (things and actions)."""

    def _request(self) -> Request:
        return Request("GET", schema_path())
