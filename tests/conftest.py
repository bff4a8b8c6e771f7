import json

import httpx
import pytest

from semiclient import AsyncClient, Client, ClientConfig


class Recorder:
    """MockTransport handler that records requests and replays queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status: int = 200, json_data=None, text: str | None = None) -> None:
        if text is not None:
            self.responses.append(httpx.Response(status, text=text))
        else:
            self.responses.append(httpx.Response(status, json=json_data))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def config():
    return ClientConfig(scheme="http", host="localhost:8080")


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def client(config, recorder):
    http_client = httpx.Client(transport=httpx.MockTransport(recorder))
    with Client(config, http_client=http_client) as c:
        yield c


@pytest.fixture
def async_client(config, recorder):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return AsyncClient(config, http_client=http_client)
