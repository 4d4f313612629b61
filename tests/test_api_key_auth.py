from __future__ import annotations

import pytest

pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from app.main import app
from app.routers.tutor import get_tutor_client


def test_chat_requires_api_key_when_configured(monkeypatch, scripted) -> None:
    monkeypatch.setenv("BACKEND_API_KEY", "test-api-key")
    app.dependency_overrides[get_tutor_client] = lambda: scripted('{"mark": 9, "mistakes": []}', "Great.", "Clean")
    body = {"language": "German", "answer": "Ich heiße Anna."}

    with TestClient(app) as client:
        unauthorized = client.post("/api/chat", json=body)
        assert unauthorized.status_code == 401

        authorized = client.post("/api/chat", json=body, headers={"X-API-Key": "test-api-key"})
        assert authorized.status_code == 200


def test_health_and_preflight_bypass_api_key(monkeypatch) -> None:
    monkeypatch.setenv("BACKEND_API_KEY", "test-api-key")

    with TestClient(app) as client:
        health = client.get("/health")
        preflight = client.options(
            "/api/chat",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

    assert health.status_code == 200
    assert preflight.status_code in (200, 204)
    assert "access-control-allow-origin" in preflight.headers
