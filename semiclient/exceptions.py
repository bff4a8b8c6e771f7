"""semiclient exceptions."""

from typing import Any

USAGE_PREFIX = "invalid usage: "


class SemiClientError(Exception):
    """Base exception for semiclient errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(SemiClientError, ValueError):
    """Client-side validation failure, raised before any request is sent.

    Every reason collected during validation is kept on ``reasons``; the
    message joins them behind a fixed ``"invalid usage: "`` prefix.
    """

    def __init__(self, *reasons: str):
        self.reasons = list(reasons)
        super().__init__(USAGE_PREFIX + ", ".join(self.reasons))


class ServerError(SemiClientError):
    """The server answered with an error status or a GraphQL error list."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        super().__init__(f"server error ({status_code}): {body}")


class NetworkError(SemiClientError):
    """The request never produced a response."""

    pass
