"""Client entry points grouping the builders by surface."""

from typing import Any

import httpx

from . import data, graphql, schema
from .beacons import ReferencePayloadBuilder
from .config import ClientConfig
from .transport import AsyncHttpTransport, HttpTransport
from .validation import Transport


class DataApi:
    """Object CRUD and references: ``client.data``."""

    def __init__(self, transport: Transport, config: ClientConfig):
        self._transport = transport
        self._config = config

    def creator(self) -> data.Creator:
        return data.Creator(self._transport)

    def validator(self) -> data.Validator:
        return data.Validator(self._transport)

    def getter(self) -> data.Getter:
        return data.Getter(self._transport)

    def getter_by_id(self) -> data.GetterById:
        return data.GetterById(self._transport)

    def updater(self) -> data.Updater:
        return data.Updater(self._transport)

    def merger(self) -> data.Merger:
        return data.Merger(self._transport)

    def deleter(self) -> data.Deleter:
        return data.Deleter(self._transport)

    def reference_creator(self) -> data.ReferenceCreator:
        return data.ReferenceCreator(self._transport)

    def reference_replacer(self) -> data.ReferenceReplacer:
        return data.ReferenceReplacer(self._transport)

    def reference_deleter(self) -> data.ReferenceDeleter:
        return data.ReferenceDeleter(self._transport)

    def reference_payload_builder(self) -> ReferencePayloadBuilder:
        return ReferencePayloadBuilder(self._config.beacon_format)


class SchemaApi:
    """Schema management: ``client.schema``."""

    def __init__(self, transport: Transport):
        self._transport = transport

    def class_creator(self) -> schema.ClassCreator:
        return schema.ClassCreator(self._transport)

    def class_deleter(self) -> schema.ClassDeleter:
        return schema.ClassDeleter(self._transport)

    def getter(self) -> schema.SchemaGetter:
        return schema.SchemaGetter(self._transport)


class GraphQLApi:
    """GraphQL queries: ``client.graphql``."""

    def __init__(self, transport: Transport):
        self._transport = transport

    def get(self) -> graphql.Getter:
        return graphql.Getter(self._transport)

    def aggregate(self) -> graphql.Aggregator:
        return graphql.Aggregator(self._transport)

    def explore(self) -> graphql.Explorer:
        return graphql.Explorer(self._transport)


class Client:
    """Synchronous client.

    Args:
        config: Connection settings.
        http_client: Optional httpx client to send requests with.

    Example:
        >>> client = Client(ClientConfig(scheme="http", host="localhost:8080"))
        >>> client.graphql.get().with_class_name("Article").with_fields("title").do()
    """

    def __init__(self, config: ClientConfig, http_client: httpx.Client | None = None):
        self.config = config
        self.transport = HttpTransport(config, http_client)
        self.data = DataApi(self.transport, config)
        self.schema = SchemaApi(self.transport)
        self.graphql = GraphQLApi(self.transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self.transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncClient:
    """Async client; every ``do()`` returns an awaitable.

    Same builders as Client.
    """

    def __init__(self, config: ClientConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self.transport = AsyncHttpTransport(config, http_client)
        self.data = DataApi(self.transport, config)
        self.schema = SchemaApi(self.transport)
        self.graphql = GraphQLApi(self.transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.transport.close()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
