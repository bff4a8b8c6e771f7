"""Builder base class with deferred, aggregated validation.

Configuration methods record problems instead of raising. ``build()`` runs
every check once and raises a single UsageError listing all of them.
"""

from typing import Any, Callable, Protocol, TypeVar

from .exceptions import UsageError
from .kinds import Kind, default_kind, validate_kind
from .types import Request

Check = Callable[[], "str | None"]
BuilderT = TypeVar("BuilderT", bound="Builder")


class Transport(Protocol):
    def send(self, request: Request) -> Any: ...


def is_set(value: Any) -> bool:
    """True unless value is None or an empty string/collection."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) > 0
    return True


def require(value: Any, message: str) -> Check:
    """Check that fails with ``message`` when ``value`` is not set."""
    return lambda: None if is_set(value) else message


def validate_all(*checks: Check) -> list[str]:
    """Run every check and return the failure messages in order."""
    errors = []
    for check in checks:
        message = check()
        if message:
            errors.append(message)
    return errors


def check_limit(limit: Any) -> str | None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        return f"limit must be a positive integer, got {limit!r}"
    return None


def check_fraction(name: str, value: Any) -> str | None:
    """Value must be a real number in [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
        return f"{name} must be a number between 0 and 1, got {value!r}"
    return None


class Builder:
    """Base for every fluent request builder.

    Configuration methods append to ``errors``; subclasses return their
    required-field checks from ``validate()`` and turn the validated
    configuration into a Request in ``_request()``. A builder is meant for a
    single ``do()`` call.
    """

    def __init__(self, transport: Transport | None = None):
        self.transport = transport
        self.errors: list[str] = []

    def _record(self, message: str | None) -> None:
        if message:
            self.errors.append(message)

    def validate(self) -> list[str]:
        return []

    def _request(self) -> Request:
        raise NotImplementedError

    def build(self) -> Request:
        errors = [*self.errors, *self.validate()]
        if errors:
            raise UsageError(*errors)
        return self._request()

    def do(self) -> Any:
        """Validate, assemble and send the request.

        With an async transport this returns an awaitable. Usage errors
        are raised immediately in both cases.
        """
        request = self.build()
        if self.transport is None:
            raise RuntimeError(f"{type(self).__name__} has no transport to send with")
        return self.transport.send(request)


class KindBuilder(Builder):
    """Builder addressing either things or actions, things by default."""

    def __init__(self, transport: Transport | None = None):
        super().__init__(transport)
        self.kind: Kind = default_kind()

    def with_kind(self: BuilderT, kind: Kind | str) -> BuilderT:
        """Address things or actions.

        Args:
            kind: ``Kind.THINGS``, ``Kind.ACTIONS`` or their string values.

        Raises:
            UsageError: For any other value.
        """
        self.kind = validate_kind(kind)
        return self
