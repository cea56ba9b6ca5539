"""Tests for the channel senders."""

import time

import pytest

from app.application.use_cases.notifications import (
    ERROR_NO_TOKENS,
    ERROR_TIMEOUT,
    EmailSender,
    PushSender,
)
from app.domain.errors import TransportError
from app.infrastructure.repositories import DeviceTokenRepository

pytestmark = pytest.mark.anyio


class SlowEmailTransport:
    def send(self, to, subject, html_content):
        time.sleep(1)
        return "late"


async def test_email_sender_reports_success(email_transport) -> None:
    result = await EmailSender(email_transport, timeout=1).send("a@example.com", "S", "B")

    assert result.success is True
    assert result.message_id == "email-1"
    assert email_transport.sent == [{"to": "a@example.com", "subject": "S", "body": "B"}]


async def test_email_sender_captures_transport_errors(failing_email_transport) -> None:
    result = await EmailSender(failing_email_transport, timeout=1).send("a@example.com", "S", "B")

    assert result.success is False
    assert "status 500" in result.error


async def test_email_sender_captures_unexpected_errors() -> None:
    class Broken:
        def send(self, to, subject, html_content):
            raise RuntimeError("boom")

    result = await EmailSender(Broken(), timeout=1).send("a@example.com", "S", "B")

    assert result.success is False
    assert result.error == "boom"


async def test_email_sender_times_out() -> None:
    started = time.monotonic()
    result = await EmailSender(SlowEmailTransport(), timeout=0.05).send("a@example.com", "S", "B")

    assert result.success is False
    assert result.error == ERROR_TIMEOUT
    assert time.monotonic() - started < 0.9


async def test_push_sender_without_tokens(db_session, push_transport) -> None:
    sender = PushSender(push_transport, DeviceTokenRepository(db_session), timeout=1)

    result = await sender.send("nobody", "T", "B")

    assert result.success is False
    assert result.error == ERROR_NO_TOKENS
    assert push_transport.calls == []


async def test_push_sender_partial_success(db_session, seed) -> None:
    from app.infrastructure.push import TokenDelivery

    class PartialTransport:
        def send_multicast(self, tokens, title, body, data=None):
            return [
                TokenDelivery(token=tokens[0], success=True, message_id="m-1"),
                TokenDelivery(token=tokens[1], success=False, error="rejected"),
            ]

    user = seed.user()
    seed.token(user.id, "token-aaaaaaaaaaaa")
    seed.token(user.id, "token-bbbbbbbbbbbb")
    sender = PushSender(PartialTransport(), DeviceTokenRepository(db_session), timeout=1)

    result = await sender.send(user.id, "T", "B", {"order_id": 7})

    assert result.success is True
    assert result.sent_count == 1
    assert len(result.failed_tokens) == 1
    assert result.to_dict()["failedTokens"][0].endswith("...")


async def test_push_sender_all_tokens_failing(db_session, seed) -> None:
    class FailingTransport:
        def send_multicast(self, tokens, title, body, data=None):
            raise TransportError("FCM request failed: unavailable")

    user = seed.user()
    seed.token(user.id, "token-aaaaaaaaaaaa")
    sender = PushSender(FailingTransport(), DeviceTokenRepository(db_session), timeout=1)

    result = await sender.send(user.id, "T", "B")

    assert result.success is False
    assert result.failed_tokens == ["token-aaaaaaaaaaaa"]
    assert "unavailable" in result.error


async def test_push_sender_prunes_unregistered_tokens(
    db_session, seed, make_push_transport
) -> None:
    user = seed.user()
    seed.token(user.id, "token-valid-000000")
    seed.token(user.id, "token-stale-000000")
    transport = make_push_transport(unregistered={"token-stale-000000"})
    repository = DeviceTokenRepository(db_session)
    sender = PushSender(transport, repository, timeout=1, prune_invalid_tokens=True)

    result = await sender.send(user.id, "T", "B")

    assert result.success is True
    assert [token.token for token in repository.list_for_user(user.id)] == [
        "token-valid-000000"
    ]
