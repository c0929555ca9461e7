from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from layer_apps.common.errors import ConfigurationError
from layer_apps.gateway.client import LayerClient
from layer_apps.serve import chatbot_app

from conftest import FakeLayer

GATE = "f6cc6bd9-4ec1-4ac2-8912-81a085255c35"


def _client(layer: FakeLayer) -> TestClient:
    return TestClient(chatbot_app.create_app(client=layer))  # type: ignore[arg-type]


def test_health_ok(fake_layer: FakeLayer) -> None:
    r = _client(fake_layer).get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "chatbot"}


def test_chat_returns_content_and_telemetry(fake_layer: FakeLayer) -> None:
    r = _client(fake_layer).post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 200
    data = r.json()
    assert data["content"] == "hello"
    assert data["model"] == "gpt-x"
    assert data["cost"] == 0.0002
    assert isinstance(data["latency"], int)
    assert data["latency"] >= 0
    assert fake_layer.calls == [("chat", GATE, [{"role": "user", "content": "hi"}])]


def test_latency_covers_gateway_call() -> None:
    layer = FakeLayer(delay=0.05)
    r = _client(layer).post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 200
    assert 40 <= r.json()["latency"] < 5000


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"messages": None},
        {"messages": "hi"},
        {"messages": {"role": "user"}},
        {"messages": []},
    ],
)
def test_missing_messages_is_400(fake_layer: FakeLayer, body: dict) -> None:
    r = _client(fake_layer).post("/api/chat", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Messages array is required"}
    assert fake_layer.calls == []


def test_malformed_message_is_400(fake_layer: FakeLayer) -> None:
    r = _client(fake_layer).post("/api/chat", json={"messages": [{"role": "user"}]})
    assert r.status_code == 400
    assert "role and content" in r.json()["error"]
    assert fake_layer.calls == []


def test_malformed_json_is_400(fake_layer: FakeLayer) -> None:
    r = _client(fake_layer).post(
        "/api/chat", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body"}
    assert fake_layer.calls == []


def test_gateway_failure_is_500(failing_layer: FakeLayer) -> None:
    r = _client(failing_layer).post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 500
    assert r.json() == {"error": "Gateway error 503: upstream unavailable"}


def test_failure_without_message_uses_fallback() -> None:
    layer = FakeLayer(error=RuntimeError())
    r = _client(layer).post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to process chat request"}


def test_failure_log_has_context_but_not_body(failing_layer: FakeLayer, caplog: pytest.LogCaptureFixture) -> None:
    secret = "my private diary entry"
    _client(failing_layer).post("/api/chat", json={"messages": [{"role": "user", "content": secret}]})
    assert "messages_count" in caplog.text
    assert secret not in caplog.text


async def _startup(app) -> None:  # noqa: ANN001
    async with app.router.lifespan_context(app):
        pass


def test_missing_api_key_refuses_to_start(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LAYER_API_KEY", raising=False)
    app = chatbot_app.create_app()
    with pytest.raises(ConfigurationError):
        asyncio.run(_startup(app))


def test_startup_builds_client_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LAYER_API_KEY", "sk-test")
    monkeypatch.setenv("LAYER_API_URL", "http://gateway.local/")
    app = chatbot_app.create_app()
    asyncio.run(_startup(app))
    assert isinstance(app.state.client, LayerClient)
    assert app.state.client.base_url == "http://gateway.local"
