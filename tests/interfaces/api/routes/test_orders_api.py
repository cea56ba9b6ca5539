"""Tests for order placement and status updates."""

from __future__ import annotations

from app.domain.entities import Channel, TemplateType
from app.domain.errors import TransportError
from app.infrastructure.models import OrderModel
from app.infrastructure.repositories import DeliveryLogRepository, OrderRepository


def test_status_update_survives_a_throwing_transport(
    client, seed, db_session, email_transport
) -> None:
    user = seed.user()
    order = seed.order(user.id)
    seed.template(TemplateType.ORDER_STATUS, Channel.EMAIL, body="Order {{order_id}} {{status}}")
    email_transport.error = TransportError("SendGrid API request failed with status 503")

    response = client.put(f"/orders/{order.id}/status", json={"status": "shipped"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["order"]["status"] == "shipped"
    assert payload["notification"]["success"] is False
    db_session.expire_all()
    assert OrderRepository(db_session).get(order.id).status == "shipped"


def test_status_update_notifies_the_customer(client, seed, email_transport) -> None:
    user = seed.user()
    order = seed.order(user.id)
    seed.template(
        TemplateType.ORDER_STATUS,
        Channel.EMAIL,
        subject="{{title}}",
        body="Track it at {{url}}",
    )

    response = client.put(f"/orders/{order.id}/status", json={"status": "delivered"})

    assert response.status_code == 200
    assert response.json()["notification"]["emailResult"]["success"] is True
    assert email_transport.sent[0]["subject"] == "Order delivered"
    assert email_transport.sent[0]["body"] == f"Track it at http://localhost:3000/orders/{order.id}"


def test_unknown_order_is_not_found_and_not_notified(client, db_session, email_transport) -> None:
    response = client.put("/orders/999/status", json={"status": "shipped"})

    assert response.status_code == 404
    assert email_transport.sent == []
    assert DeliveryLogRepository(db_session).list(limit=None) == []


def test_status_is_required(client, seed) -> None:
    order = seed.order(seed.user().id)

    assert client.put(f"/orders/{order.id}/status", json={}).status_code == 400
    assert client.put(f"/orders/{order.id}/status", json={"status": "  "}).status_code == 400


def test_status_update_without_notification_service(app, client, seed) -> None:
    from app.infrastructure.transports import NotificationTransports

    app.state.notification_transports = NotificationTransports(
        email=None, push=None, error="not configured"
    )
    order = seed.order(seed.user().id)

    response = client.put(f"/orders/{order.id}/status", json={"status": "cancelled"})

    assert response.status_code == 200
    assert response.json()["notification"] == {
        "success": False,
        "error": "notifications_unavailable",
    }


def test_place_order_sends_confirmation(client, seed, email_transport, auth_headers) -> None:
    user = seed.user()
    seed.template(
        TemplateType.ORDER_PLACED,
        Channel.EMAIL,
        subject="Order #{{order_id}}",
        body="Total {{order_total}}",
    )

    response = client.post(
        "/orders",
        json={
            "userId": user.id,
            "items": [{"id": "sku-1", "name": "Mug", "quantity": 2, "price": 249.5}],
            "total": 499,
            "postalCode": "560001",
        },
        headers=auth_headers(user.email),
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["order"]["status"] == "processing"
    assert payload["order"]["postal_code"] == "560001"
    assert payload["notification"]["emailResult"]["success"] is True
    assert email_transport.sent[0]["subject"] == f"Order #{payload['order']['id']}"
    assert email_transport.sent[0]["body"] == "Total 499.00"


def test_place_order_requires_items(client, seed, auth_headers) -> None:
    user = seed.user()

    response = client.post(
        "/orders",
        json={"userId": user.id, "items": [], "total": 10},
        headers=auth_headers(user.email),
    )

    assert response.status_code == 400


ORDER_BODY = {
    "items": [{"id": "sku-1", "name": "Mug", "quantity": 1, "price": 249.5}],
    "total": 249.5,
}


def test_place_order_requires_authentication(client, seed, email_transport) -> None:
    user = seed.user()

    response = client.post("/orders", json={"userId": user.id, **ORDER_BODY})

    assert response.status_code == 401
    assert email_transport.sent == []


def test_customer_cannot_order_for_someone_else(
    client, seed, db_session, email_transport, auth_headers
) -> None:
    seed.user("mallory@example.com")
    victim = seed.user("victim@example.com")
    seed.template(TemplateType.ORDER_PLACED, Channel.EMAIL)

    response = client.post(
        "/orders",
        json={"userId": victim.id, **ORDER_BODY},
        headers=auth_headers("mallory@example.com"),
    )

    assert response.status_code == 403
    assert email_transport.sent == []
    assert db_session.query(OrderModel).count() == 0


def test_admin_can_order_for_a_customer(client, seed, auth_headers) -> None:
    seed.admin("owner@example.com")
    customer = seed.user()

    response = client.post(
        "/orders",
        json={"userId": customer.id, **ORDER_BODY},
        headers=auth_headers("owner@example.com"),
    )

    assert response.status_code == 201
    assert response.json()["order"]["user_id"] == customer.id
