"""semiclient: Python client for the things/actions REST and GraphQL API.

Usage:
    import semiclient

    client = semiclient.client(scheme="http", host="localhost:8080")

    # Create a thing
    article = (
        client.data.creator()
        .with_class_name("Article")
        .with_schema({"title": "Hello"})
        .do()
    )

    # Query with a filter
    result = (
        client.graphql.get()
        .with_class_name("Article")
        .with_fields("title wordCount")
        .with_where({"operator": "GreaterThanEqual", "path": ["wordCount"], "valueInt": 50})
        .with_limit(7)
        .do()
    )
"""

from typing import Any

from .beacons import BeaconFormat, ReferencePayloadBuilder, build_beacon
from .client import AsyncClient, Client
from .config import ClientConfig
from .exceptions import NetworkError, SemiClientError, ServerError, UsageError
from .filters import Date, GeoRange, WhereFilter, WhereOperands, parse_where, serialize_where
from .kinds import DEFAULT_KIND, KIND_ACTIONS, KIND_THINGS, Kind, validate_kind
from .query import ExploreParams, Group, Mode, Movement, QueryRequest, assemble
from .types import DataObject, Request

__version__ = "0.1.0"
__all__ = [
    "AsyncClient",
    "BeaconFormat",
    "Client",
    "ClientConfig",
    "DEFAULT_KIND",
    "DataObject",
    "Date",
    "ExploreParams",
    "GeoRange",
    "Group",
    "KIND_ACTIONS",
    "KIND_THINGS",
    "Kind",
    "Mode",
    "Movement",
    "NetworkError",
    "QueryRequest",
    "ReferencePayloadBuilder",
    "Request",
    "SemiClientError",
    "ServerError",
    "UsageError",
    "WhereFilter",
    "WhereOperands",
    "assemble",
    "async_client",
    "build_beacon",
    "client",
    "parse_where",
    "serialize_where",
    "validate_kind",
]


def client(scheme: str = "http", host: str = "", **kwargs: Any) -> Client:
    """Create a synchronous Client; extra keyword arguments go to ClientConfig."""
    return Client(ClientConfig(scheme=scheme, host=host, **kwargs))


def async_client(scheme: str = "http", host: str = "", **kwargs: Any) -> AsyncClient:
    """Create an AsyncClient; extra keyword arguments go to ClientConfig."""
    return AsyncClient(ClientConfig(scheme=scheme, host=host, **kwargs))
