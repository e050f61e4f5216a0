import json

import httpx
import pytest
from fastapi.testclient import TestClient

from pinecone_proxy.config.settings import Settings
from pinecone_proxy.main import create_app
from pinecone_proxy.utils.pinecone_client import PineconeClient


class FakePinecone:
    """httpx.MockTransport handler that records calls and replays a canned response."""

    def __init__(self):
        self.requests = []
        self.responder = lambda request: httpx.Response(
            200, json={"result": {"hits": [{"_id": "rec-1", "_score": 0.9, "fields": {"title": "a"}}]}}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings():
    return Settings(log_level="DEBUG", diagnostic_namespaces=["__default__", "docs", "notes"])


@pytest.fixture
def environment():
    return {
        "PINECONE_API_KEY": "pc-test-key",
        "PINECONE_INDEX_HOST": "https://idx-abc.svc.pinecone.io",
    }


@pytest.fixture
def pinecone():
    return FakePinecone()


@pytest.fixture
def make_client(settings, pinecone):
    def _make(environment):
        client = PineconeClient(settings.pinecone_api_version, transport=httpx.MockTransport(pinecone))
        app = create_app(settings=settings, environment=environment, client=client)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, environment):
    return make_client(environment)
