"""Shared fixtures for the storefront test-suite."""

from __future__ import annotations

import os
import tempfile
import time
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from passlib.hash import pbkdf2_sha256

TEST_DB_PATH = Path(tempfile.gettempdir()) / "storefront_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp-test-secret"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "PUSH_SUPPRESS_AFTER_NO_TOKEN_FAILURES"):
    os.environ.pop(_name, None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from app.application.use_cases.notifications import (  # noqa: E402
    EmailSender,
    NotificationDispatcher,
    PushSender,
)
from app.domain.entities import (  # noqa: E402
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    Channel,
    DeviceToken,
    MessageTemplate,
    Order,
    TemplateType,
    User,
)
from app.domain.errors import TransportError  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import DeviceTokenModel  # noqa: E402
from app.infrastructure.push import TokenDelivery  # noqa: E402
from app.infrastructure.repositories import (  # noqa: E402
    DeliveryLogRepository,
    DeviceTokenRepository,
    MessageTemplateRepository,
    OrderRepository,
    UserNotificationRepository,
    UserRepository,
)
from app.infrastructure.transports import NotificationTransports  # noqa: E402
from app.interfaces.api.dependencies import require_admin  # noqa: E402
from app.utils import now_in_app_timezone  # noqa: E402
from main import create_app  # noqa: E402

# Hashed with a low work factor; the production setting is slow.
STORED_PASSWORD = "Secret123!"
STORED_PASSWORD_HASH = pbkdf2_sha256.using(rounds=1000).hash(STORED_PASSWORD)


class FakeEmailTransport:
    """In-memory stand-in for the SendGrid transport."""

    def __init__(self, *, error: Exception | None = None, delay: float = 0.0) -> None:
        self.error = error
        self.delay = delay
        self.sent: list[dict[str, str]] = []

    def send(self, to: str, subject: str, html_content: str) -> str | None:
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "body": html_content})
        return f"email-{len(self.sent)}"


class FakePushTransport:
    """In-memory stand-in for the Firebase transport."""

    def __init__(
        self,
        *,
        rejected: set[str] | None = None,
        unregistered: set[str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.rejected = rejected or set()
        self.unregistered = unregistered or set()
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def send_multicast(self, tokens, title, body, data=None):
        if self.error is not None:
            raise self.error
        self.calls.append(
            {"tokens": list(tokens), "title": title, "body": body, "data": dict(data or {})}
        )
        deliveries = []
        for index, token in enumerate(tokens):
            if token in self.unregistered:
                deliveries.append(
                    TokenDelivery(
                        token=token, success=False, error="unregistered", unregistered=True
                    )
                )
            elif token in self.rejected:
                deliveries.append(TokenDelivery(token=token, success=False, error="rejected"))
            else:
                deliveries.append(
                    TokenDelivery(token=token, success=True, message_id=f"push-{index}")
                )
        return deliveries


class Seeder:
    """Create persisted fixtures through the repositories."""

    def __init__(self, session) -> None:
        self.session = session

    def user(
        self,
        email: str = "ana@example.com",
        *,
        first_name: str = "Ana",
        last_name: str = "Silva",
        role: str = ROLE_CUSTOMER,
        password_hash: str = STORED_PASSWORD_HASH,
    ) -> User:
        return UserRepository(self.session).create(
            User(
                id=None,
                email=email,
                password=password_hash,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
        )

    def admin(self, email: str = "admin@example.com", **kwargs) -> User:
        kwargs.setdefault("first_name", "Store")
        kwargs.setdefault("last_name", "Admin")
        return self.user(email, role=ROLE_ADMIN, **kwargs)

    def template(
        self,
        template_type: TemplateType,
        channel: Channel,
        *,
        subject: str = "Hello {{first_name}}",
        body: str = "Hi {{first_name}}, {{body}}",
        name: str | None = None,
        is_active: bool = True,
    ) -> MessageTemplate:
        return MessageTemplateRepository(self.session).create(
            MessageTemplate(
                id=None,
                name=name or f"{template_type.value} {channel.value}",
                type=template_type,
                channel=channel,
                subject=subject,
                body=body,
                is_active=is_active,
            )
        )

    def token(self, user_id: str, token: str) -> DeviceToken:
        # Device tokens are registered by the client application, not this API.
        model = DeviceTokenModel(
            user_id=user_id,
            token=token,
            device_info={"os": "android"},
            created_at=now_in_app_timezone(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return DeviceToken(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            device_info=dict(model.device_info),
            created_at=model.created_at,
        )

    def order(self, user_id: str, *, status: str = "processing") -> Order:
        return OrderRepository(self.session).create(
            Order(
                id=None,
                user_id=user_id,
                status=status,
                total=Decimal("499.00"),
                items=[{"id": "sku-1", "name": "Mug", "quantity": 1, "price": 499.0}],
            )
        )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed(db_session) -> Seeder:
    return Seeder(db_session)


@pytest.fixture
def email_transport() -> FakeEmailTransport:
    return FakeEmailTransport()


@pytest.fixture
def push_transport() -> FakePushTransport:
    return FakePushTransport()


@pytest.fixture
def make_dispatcher(db_session):
    """Build a dispatcher over the test session with the given transports."""

    def _make(
        email=None,
        push=None,
        *,
        timeout: float = 2.0,
        suppress_after: int | None = None,
        prune_invalid_tokens: bool = False,
        inbox: bool = False,
    ) -> NotificationDispatcher:
        return NotificationDispatcher(
            templates=MessageTemplateRepository(db_session),
            logs=DeliveryLogRepository(db_session),
            users=UserRepository(db_session),
            email_sender=EmailSender(email, timeout=timeout),
            push_sender=PushSender(
                push,
                DeviceTokenRepository(db_session),
                timeout=timeout,
                prune_invalid_tokens=prune_invalid_tokens,
            ),
            suppress_after_no_token_failures=suppress_after,
            inbox=UserNotificationRepository(db_session) if inbox else None,
        )

    return _make


@pytest.fixture
def transports(email_transport, push_transport) -> NotificationTransports:
    return NotificationTransports(email=email_transport, push=push_transport)


@pytest.fixture
def app(transports):
    application = create_app()
    application.state.notification_transports = transports
    application.dependency_overrides[require_admin] = lambda: User(
        id="admin-id",
        email="admin@example.com",
        password=STORED_PASSWORD_HASH,
        first_name="Store",
        last_name="Admin",
        role=ROLE_ADMIN,
    )
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_email_transport() -> FakeEmailTransport:
    return FakeEmailTransport(error=TransportError("SendGrid API request failed with status 500"))


@pytest.fixture
def stored_password() -> str:
    """Plain-text password of every user created through :class:`Seeder`."""

    return STORED_PASSWORD


@pytest.fixture
def make_push_transport():
    return FakePushTransport


@pytest.fixture
def make_email_transport():
    return FakeEmailTransport


@pytest.fixture
def auth_headers(client, stored_password):
    """Log a seeded user in and return the bearer header for their token."""

    def _headers(email: str) -> dict[str, str]:
        response = client.post(
            "/auth/token", data={"username": email, "password": stored_password}
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
