from dataclasses import replace

import httpx
import pytest
from fastapi.testclient import TestClient

from getmailer_config import ConfigurationError
from getmailer_http_server import create_app

from conftest import RecordingTransport


@pytest.fixture
def client(settings, dispatcher):
    return TestClient(create_app(settings, dispatcher))


def _rpc(client, method, params=None, request_id=1):
    body = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/", json=body)


def test_health(client):
    response = client.get("/")
    assert response.json() == {"status": "ok", "service": "getmailer-mcp"}


def test_initialize(client):
    result = _rpc(client, "initialize", {}).json()["result"]

    assert result["serverInfo"]["name"] == "getmailer-mcp"
    assert "tools" in result["capabilities"]


def test_tools_list_returns_full_catalog(client):
    tools = _rpc(client, "tools/list").json()["result"]["tools"]

    assert len(tools) == 16
    get_batch = next(t for t in tools if t["name"] == "get_batch")
    assert get_batch["inputSchema"]["required"] == ["id"]


def test_tools_call_success(client, transport):
    response = _rpc(client, "tools/call", {"name": "get_analytics", "arguments": {}})

    result = response.json()["result"]
    assert result["isError"] is False
    assert result["content"][0]["text"] == '{\n  "ok": true\n}'
    assert transport.last.url.query == b"type=summary&days=30"


def test_tools_call_remote_error(settings, make_dispatcher):
    transport = RecordingTransport(lambda r: httpx.Response(503, text="down"))
    client = TestClient(create_app(settings, make_dispatcher(settings, transport)))

    result = _rpc(client, "tools/call", {"name": "list_domains"}).json()["result"]

    assert result["isError"] is True
    assert result["content"][0]["text"] == "Error: API Error: Service Unavailable"


def test_tools_call_unknown_tool(client, transport):
    error = _rpc(client, "tools/call", {"name": "nope", "arguments": {}}).json()["error"]

    assert error["code"] == -32601
    assert "nope" in error["message"]
    assert transport.requests == []


def test_tools_call_rejects_non_object_arguments(client, transport):
    error = _rpc(client, "tools/call", {"name": "list_emails", "arguments": [1, 2]}).json()["error"]

    assert error["code"] == -32602
    assert transport.requests == []


def test_unknown_method(client):
    error = _rpc(client, "resources/list").json()["error"]
    assert error["code"] == -32601


def test_notification_gets_no_body(client):
    response = client.post("/", json={"jsonrpc": "2.0", "method": "notifications/initialized"})

    assert response.status_code == 204
    assert response.content == b""


def test_parse_error(client):
    response = client.post("/", content=b"{broken", headers={"Content-Type": "application/json"})
    assert response.json()["error"]["code"] == -32700


def test_startup_requires_key_without_signup(keyless_settings):
    with pytest.raises(ConfigurationError):
        create_app(replace(keyless_settings, signup_enabled=False))
