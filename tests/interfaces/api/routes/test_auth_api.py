"""Tests for registration and token endpoints."""

from __future__ import annotations

from app.domain.entities import Channel, TemplateType
from app.interfaces.api.dependencies import require_admin


def test_register_sends_welcome_and_admin_notifications(client, seed, email_transport) -> None:
    seed.admin("owner@example.com")
    seed.template(TemplateType.REGISTRATION, Channel.EMAIL, subject="Welcome {{first_name}}")
    seed.template(
        TemplateType.CUSTOMER_SIGNUPS,
        Channel.EMAIL,
        subject="New signup",
        body="{{customer_name}} ({{customer_email}})",
    )

    response = client.post(
        "/auth/register",
        json={
            "email": "new@example.com",
            "password": "Password123",
            "firstName": "Neha",
            "lastName": "Rao",
        },
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["user"]["role"] == "customer"
    assert payload["notification"]["welcome"]["success"] is True
    assert payload["notification"]["admins"][0]["recipient"] == "owner@example.com"
    sent = {message["to"]: message for message in email_transport.sent}
    assert sent["new@example.com"]["subject"] == "Welcome Neha"
    assert sent["owner@example.com"]["body"] == "Neha Rao (new@example.com)"


def test_register_succeeds_when_email_fails(client, email_transport) -> None:
    email_transport.error = RuntimeError("SMTP down")

    response = client.post(
        "/auth/register",
        json={
            "email": "new@example.com",
            "password": "Password123",
            "firstName": "Neha",
            "lastName": "Rao",
        },
    )

    assert response.status_code == 201
    assert response.json()["notification"]["welcome"]["success"] is False


def test_register_rejects_duplicates_and_missing_fields(client, seed) -> None:
    seed.user("taken@example.com")

    duplicate = client.post(
        "/auth/register",
        json={
            "email": "taken@example.com",
            "password": "Password123",
            "firstName": "A",
            "lastName": "B",
        },
    )
    missing = client.post("/auth/register", json={"email": "x@example.com"})

    assert duplicate.status_code == 400
    assert missing.status_code == 400


def test_token_grants_admin_access(app, client, seed, stored_password) -> None:
    app.dependency_overrides.pop(require_admin, None)
    seed.admin("owner@example.com")

    unauthenticated = client.get("/notifications/logs")
    token_response = client.post(
        "/auth/token",
        data={"username": "owner@example.com", "password": stored_password},
    )

    assert unauthenticated.status_code == 401
    assert token_response.status_code == 200
    token = token_response.json()["access_token"]
    response = client.get(
        "/notifications/logs", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200


def test_customers_cannot_use_admin_endpoints(app, client, seed, stored_password) -> None:
    app.dependency_overrides.pop(require_admin, None)
    seed.user("ana@example.com")

    token = client.post(
        "/auth/token",
        data={"username": "ana@example.com", "password": stored_password},
    ).json()["access_token"]
    response = client.get("/templates/email", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_wrong_password_is_rejected(client, seed) -> None:
    seed.user("ana@example.com")

    response = client.post(
        "/auth/token", data={"username": "ana@example.com", "password": "nope"}
    )

    assert response.status_code == 401
