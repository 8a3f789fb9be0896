import json

import httpx
import pytest

from wvclient.vectordb.client import WeaviateClient
from wvclient.vectordb.config import ClientConfig


class _RecordingHandler:
    """Serve queued responses and remember every request it receives."""

    def __init__(self):
        self.requests = []
        self._responses = []

    def queue(self, status_code=200, body=None, *, text=None):
        self._responses.append((status_code, body, text))

    def __call__(self, request):
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200)
        status_code, body, text = self._responses.pop(0)
        if isinstance(body, Exception):
            raise body
        if text is not None:
            return httpx.Response(status_code, text=text)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def last(self):
        return self.requests[-1]

    @staticmethod
    def body(request):
        if not request.content:
            return None
        return json.loads(request.content)


@pytest.fixture
def handler():
    return _RecordingHandler()


@pytest.fixture
def make_client(handler):
    def _make(**config_overrides):
        config = ClientConfig(url="http://weaviate.test", **config_overrides)
        return WeaviateClient(config, transport=httpx.MockTransport(handler))

    return _make
