import json

import httpx
import pytest

from getmailer_client import GetMailerClient
from getmailer_config import Settings
from getmailer_dispatch import Dispatcher

API_URL = "https://api.getmailer.test"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler=None):
        self.requests = []
        self._respond = handler or (lambda request: httpx.Response(200, json={"ok": True}))
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def settings():
    return Settings(api_url=API_URL, api_key="gm_test_key")


@pytest.fixture
def keyless_settings():
    return Settings(api_url=API_URL, api_key=None)


@pytest.fixture
def transport():
    return RecordingTransport()


def build_dispatcher(settings, transport):
    client = GetMailerClient(settings, http_client=httpx.AsyncClient(transport=transport))
    return Dispatcher(settings, client)


@pytest.fixture
def dispatcher(settings, transport):
    return build_dispatcher(settings, transport)


@pytest.fixture
def make_dispatcher():
    return build_dispatcher
