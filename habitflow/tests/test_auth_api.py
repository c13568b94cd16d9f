"""Auth API tests: register, login, refresh and current user."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from habitflow.platform.outbox.models import OutboxMessage


def test_register_issues_tokens(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "New@Example.com", "password": "password123", "name": "New User"},
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["name"] == "New User"
    assert body["access_token"]
    assert body["refresh_token"]
    assert body["csrf_token"]
    assert OutboxMessage.query.filter_by(event_type="auth.user.registered").count() == 1


def test_register_duplicate_email(client, user):
    resp = client.post(
        "/api/auth/register", json={"email": user.email, "password": "password123"}
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "email_already_exists"


def test_register_weak_password(client):
    resp = client.post(
        "/api/auth/register", json={"email": "weak@example.com", "password": "password"}
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_login_success(client, user):
    resp = client.post("/api/auth/login", json={"email": "TEST@example.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["access_token"]
    assert body["refresh_token"]
    assert body["user"]["id"] == user.id


def test_login_wrong_password(client, user):
    resp = client.post("/api/auth/login", json={"email": user.email, "password": "nope12345"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "invalid_credentials"


def test_refresh_returns_new_access_token(client, user):
    tokens = client.post(
        "/api/auth/login", json={"email": user.email, "password": "secret123"}
    ).get_json()

    resp = client.post(
        "/api/auth/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["access_token"]


def test_me(client, auth_headers, user):
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == user.email


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
