# File: tests/test_app.py

import pytest
from fastapi.testclient import TestClient

from signup_backend.config.settings import Settings
from signup_backend.main import create_app


def test_cors_allows_known_origin(client):
    resp = client.options(
        "/api/login",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_rejects_unknown_origin(client):
    resp = client.options(
        "/api/login",
        headers={
            "Origin": "https://evil.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers


def test_cors_rejects_other_methods(client):
    resp = client.options(
        "/api/login",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "DELETE",
        },
    )
    assert resp.status_code == 400


def test_only_auth_routes_exist(client):
    assert client.get("/").status_code == 404
    assert client.get("/api/signup").status_code == 405


def test_startup_fails_when_store_unreachable(context):
    context.accounts.ping_error = ConnectionError("database unreachable")
    app = create_app(Settings(), context=context)
    with pytest.raises(ConnectionError):
        with TestClient(app):
            pass


def test_cors_origins_from_settings():
    settings = Settings(cors_origins=" https://a.example.com , ,https://b.example.com")
    assert settings.get_cors_origins_list() == ["https://a.example.com", "https://b.example.com"]
