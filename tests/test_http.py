import pytest
from fastapi.testclient import TestClient

from chatgpt_handoff.handoff import CONFIRMATION
from chatgpt_handoff.main import create_app
from chatgpt_handoff.schemas import METHOD_NOT_FOUND, PARSE_ERROR
from tests.conftest import call_params, rpc


@pytest.fixture
def client(config, dispatcher):
    return TestClient(create_app(config, dispatcher))


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
def test_health_answers_any_method(client, method):
    r = client.request(method, "/health")
    assert r.status_code == 200
    assert r.text == "OK"


def test_initialize_over_http(client):
    r = client.post("/mcp", json=rpc("initialize", {"protocolVersion": "2024-11-05"}))
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["result"]["protocolVersion"] == "2025-06-18"


def test_cors_headers_on_rpc_responses(client):
    r = client.post("/mcp", json=rpc("tools/list"))
    assert r.headers["access-control-allow-origin"] == "*"
    assert r.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert "Content-Type" in r.headers["access-control-allow-headers"]


def test_preflight_is_empty_200(client):
    r = client.options("/mcp", headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"})
    assert r.status_code == 200
    assert r.content == b""
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_on_mcp_are_405(client, method):
    r = client.request(method, "/mcp")
    assert r.status_code == 405


def test_tools_call_over_http(client, desktop):
    r = client.post("/mcp", json=rpc("tools/call", call_params("Research X"), id_val="c1"))
    body = r.json()
    assert body["id"] == "c1"
    assert body["result"]["content"][0]["text"] == CONFIRMATION
    assert desktop.copied == ["Research X"]


def test_malformed_body_is_parse_error(client):
    r = client.post("/mcp", content=b"{nope", headers={"content-type": "application/json"})
    assert r.status_code == 200
    assert r.json() == {"jsonrpc": "2.0", "id": None, "error": {"code": PARSE_ERROR, "message": "Parse error"}}


def test_unknown_method_over_http(client):
    r = client.post("/mcp", json=rpc("prompts/list"))
    assert r.json()["error"]["code"] == METHOD_NOT_FOUND


def test_notification_gets_empty_object(client):
    r = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert r.status_code == 200
    assert r.json() == {}


def test_shutdown_is_acknowledged_but_server_keeps_serving(client):
    r = client.post("/mcp", json=rpc("shutdown", id_val=1))
    assert r.json() == {"jsonrpc": "2.0", "id": 1, "result": {}}
    r = client.post("/mcp", json=rpc("tools/list", id_val=2))
    assert r.json()["id"] == 2


def test_deeply_nested_body_is_parse_error(client):
    r = client.post("/mcp", content=b"[" * 200000, headers={"content-type": "application/json"})
    assert r.status_code == 200
    assert r.json()["error"]["code"] == PARSE_ERROR
