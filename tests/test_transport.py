import httpx
import pytest

import semiclient
from semiclient import AsyncClient, Client, ClientConfig, NetworkError, ServerError, UsageError
from semiclient.schema import SchemaGetter
from semiclient.transport import HttpTransport
from semiclient.types import Request


def test_config_base_url():
    config = ClientConfig(scheme="https", host="demo.example.com/")
    assert config.base_url == "https://demo.example.com/v1"


def test_config_requires_scheme_and_host():
    with pytest.raises(UsageError) as excinfo:
        ClientConfig(scheme="ftp", host="")
    assert excinfo.value.reasons == ["scheme must be one of http, https, got 'ftp'", "host must be set"]


def test_config_beacon_template(recorder):
    custom = ClientConfig(scheme="http", host="localhost:8080", beacon_template="ref://{kind}/{id}")
    with Client(custom, http_client=httpx.Client(transport=httpx.MockTransport(recorder))) as client:
        payload = client.data.reference_payload_builder().with_id("abc").payload()
    assert payload == {"beacon": "ref://things/abc"}


def test_server_error_passes_body_through(client, recorder):
    body = {"error": [{"message": "invalid thing: not a string"}]}
    recorder.reply(422, body)

    with pytest.raises(ServerError) as excinfo:
        client.data.creator().with_class_name("Article").with_schema({"title": 1}).do()

    assert excinfo.value.status_code == 422
    assert excinfo.value.body == body
    assert "422" in str(excinfo.value)
    assert len(recorder.requests) == 1


def test_server_error_with_text_body(client, recorder):
    recorder.reply(500, text="Internal Server Error")

    with pytest.raises(ServerError) as excinfo:
        client.schema.getter().do()

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == "Internal Server Error"


def test_redirect_raises_server_error(client, recorder):
    recorder.reply(302, {"moved": True})

    with pytest.raises(ServerError) as excinfo:
        client.schema.getter().do()

    assert excinfo.value.status_code == 302
    assert excinfo.value.body == {"moved": True}


def test_network_error(config):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpTransport(config, httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(NetworkError, match="GET /schema failed"):
        transport.send(Request("GET", "/schema"))


def test_builder_without_transport():
    with pytest.raises(RuntimeError, match="no transport"):
        SchemaGetter().do()


@pytest.mark.asyncio
async def test_async_client(async_client, recorder):
    recorder.reply(200, {"class": "Article", "id": "abc", "schema": {}})

    async with async_client as client:
        res = await client.data.creator().with_class_name("Article").do()

    assert res.id == "abc"
    assert res.class_name == "Article"
    assert recorder.last.url.path == "/v1/things"


@pytest.mark.asyncio
async def test_async_query_errors(async_client, recorder):
    recorder.reply(200, {"errors": [{"message": "boom"}]})

    with pytest.raises(ServerError):
        await async_client.graphql.explore().with_concepts(["a"]).with_fields("beacon").do()
    await async_client.close()


@pytest.mark.asyncio
async def test_async_usage_error_is_raised_before_awaiting(async_client, recorder):
    async with async_client as client:
        with pytest.raises(UsageError):
            client.graphql.explore().with_fields("beacon").do()
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_async_client_factory():
    async with semiclient.async_client(scheme="http", host="localhost:8080") as client:
        assert isinstance(client, AsyncClient)
        assert client.config.base_url == "http://localhost:8080/v1"
