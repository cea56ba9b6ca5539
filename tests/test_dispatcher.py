"""Tests for the notification dispatcher."""

import pytest
from sqlalchemy.exc import OperationalError

from app.application.use_cases.notifications import (
    ERROR_NO_RECIPIENT,
    ERROR_NO_TOKENS,
    ERROR_SUPPRESSED,
    ERROR_TEMPLATE_LOOKUP_FAILED,
    ERROR_TEMPLATE_MISSING,
    ERROR_TOKEN_LOOKUP_FAILED,
)
from app.domain.entities import Channel, NotificationRequest, TemplateType
from app.infrastructure.repositories import (
    DeliveryLogRepository,
    DeviceTokenRepository,
    MessageTemplateRepository,
    UserNotificationRepository,
    UserRepository,
)

pytestmark = pytest.mark.anyio


async def test_email_only_with_failing_transport(
    db_session, seed, make_dispatcher, failing_email_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.ORDER_STATUS, Channel.EMAIL)
    dispatcher = make_dispatcher(email=failing_email_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.ORDER_STATUS, user_id=user.id, send_push=False)
    )

    assert result.success is False
    assert result.push_result is None
    assert result.email_result is not None and result.email_result.success is False
    logs = DeliveryLogRepository(db_session).list()
    assert len(logs) == 1
    assert logs[0].channel == "email"
    assert logs[0].success is False


async def test_email_succeeds_while_push_has_no_tokens(
    db_session, seed, make_dispatcher, email_transport, push_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.ORDER_STATUS, Channel.EMAIL)
    seed.template(TemplateType.ORDER_STATUS, Channel.PUSH)
    dispatcher = make_dispatcher(email=email_transport, push=push_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.ORDER_STATUS, user_id=user.id)
    )

    assert result.success is True
    assert result.email_result.success is True
    assert result.push_result.success is False
    assert result.push_result.error == ERROR_NO_TOKENS
    assert {log.channel for log in DeliveryLogRepository(db_session).list()} == {"email", "push"}


async def test_variables_are_substituted_from_user_and_request(
    seed, make_dispatcher, email_transport, push_transport
) -> None:
    user = seed.user(first_name="Ana")
    seed.token(user.id, "device-token-123456")
    seed.template(
        TemplateType.ORDER_STATUS,
        Channel.EMAIL,
        subject="Order {{order_id}}",
        body="Hello {{first_name}}, {{body}} {{unknown}}",
    )
    seed.template(
        TemplateType.ORDER_STATUS, Channel.PUSH, subject="{{title}}", body="{{status}}"
    )
    dispatcher = make_dispatcher(email=email_transport, push=push_transport)

    await dispatcher.dispatch(
        NotificationRequest(
            type=TemplateType.ORDER_STATUS,
            user_id=user.id,
            title="Order shipped",
            body="it is on the way.",
            data={"order_id": 9, "status": "shipped"},
        )
    )

    assert email_transport.sent == [
        {
            "to": "ana@example.com",
            "subject": "Order 9",
            "body": "Hello Ana, it is on the way. {{unknown}}",
        }
    ]
    assert push_transport.calls[0]["title"] == "Order shipped"
    assert push_transport.calls[0]["body"] == "shipped"
    assert push_transport.calls[0]["data"] == {"order_id": 9, "status": "shipped"}


async def test_missing_template_fails_only_its_channel(
    db_session, seed, make_dispatcher, email_transport, push_transport
) -> None:
    user = seed.user()
    seed.token(user.id, "device-token-123456")
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(email=email_transport, push=push_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id)
    )

    assert result.success is True
    assert result.email_result.error == ERROR_TEMPLATE_MISSING
    assert result.push_result.success is True
    assert email_transport.sent == []
    logs = DeliveryLogRepository(db_session).list(channel="email")
    assert [log.error for log in logs] == [ERROR_TEMPLATE_MISSING]


async def test_email_without_recipient(seed, make_dispatcher, email_transport) -> None:
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    dispatcher = make_dispatcher(email=email_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, send_push=False)
    )

    assert result.success is False
    assert result.email_result.error == ERROR_NO_RECIPIENT


async def test_explicit_email_overrides_user_address(seed, make_dispatcher, email_transport) -> None:
    user = seed.user()
    seed.template(TemplateType.REGISTRATION, Channel.EMAIL)
    dispatcher = make_dispatcher(email=email_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(
            type=TemplateType.REGISTRATION,
            user_id=user.id,
            email="other@example.com",
            send_push=False,
        )
    )

    assert result.email_result.recipient == "other@example.com"
    assert email_transport.sent[0]["to"] == "other@example.com"


async def test_push_is_suppressed_after_repeated_missing_tokens(
    db_session, seed, make_dispatcher, push_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(push=push_transport, suppress_after=2)
    request = NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id, send_email=False)

    first = await dispatcher.dispatch(request)
    second = await dispatcher.dispatch(request)
    third = await dispatcher.dispatch(request)

    assert first.push_result.error == ERROR_NO_TOKENS
    assert second.push_result.error == ERROR_NO_TOKENS
    assert third.push_result.error == ERROR_SUPPRESSED
    assert len(DeliveryLogRepository(db_session).list(user_id=user.id)) == 3


async def test_push_suppression_is_disabled_by_default(
    seed, make_dispatcher, push_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(push=push_transport)
    request = NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id, send_email=False)

    for _ in range(3):
        result = await dispatcher.dispatch(request)

    assert result.push_result.error == ERROR_NO_TOKENS


async def test_channels_time_out_independently(
    seed, make_dispatcher, make_email_transport, push_transport
) -> None:
    user = seed.user()
    seed.token(user.id, "device-token-123456")
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(
        email=make_email_transport(delay=1.0), push=push_transport, timeout=0.05
    )

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id)
    )

    assert result.success is True
    assert result.email_result.error == "timeout"
    assert result.push_result.success is True


async def test_to_dict_only_reports_requested_channels(
    seed, make_dispatcher, email_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    dispatcher = make_dispatcher(email=email_transport)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id, send_push=False)
    )

    payload = result.to_dict()
    assert payload["success"] is True
    assert payload["emailResult"]["messageId"] == "email-1"
    assert "pushResult" not in payload


def _database_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


async def test_token_lookup_failure_keeps_email_result(
    db_session, seed, make_dispatcher, email_transport, push_transport, monkeypatch
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(email=email_transport, push=push_transport)
    monkeypatch.setattr(DeviceTokenRepository, "list_for_user", _database_down)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id)
    )

    assert result.success is True
    assert result.email_result.success is True
    assert result.push_result.success is False
    assert result.push_result.error == ERROR_TOKEN_LOOKUP_FAILED
    assert len(email_transport.sent) == 1
    logs = {log.channel: log for log in DeliveryLogRepository(db_session).list()}
    assert logs["email"].success is True
    assert logs["push"].error == ERROR_TOKEN_LOOKUP_FAILED


async def test_failed_token_pruning_still_reports_delivery(
    seed, make_dispatcher, make_push_transport, monkeypatch
) -> None:
    user = seed.user()
    seed.token(user.id, "device-token-good")
    seed.token(user.id, "device-token-stale")
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(
        push=make_push_transport(unregistered={"device-token-stale"}),
        prune_invalid_tokens=True,
    )
    monkeypatch.setattr(DeviceTokenRepository, "delete_tokens", _database_down)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id, send_email=False)
    )

    assert result.success is True
    assert result.push_result.sent_count == 1
    assert result.push_result.failed_tokens == ["device-token-stale"]


async def test_template_lookup_failure_is_a_channel_failure(
    seed, make_dispatcher, email_transport, push_transport, monkeypatch
) -> None:
    user = seed.user()
    seed.token(user.id, "device-token-123456")
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(email=email_transport, push=push_transport)
    monkeypatch.setattr(MessageTemplateRepository, "list_active", _database_down)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id)
    )

    assert result.success is False
    assert result.email_result.error == ERROR_TEMPLATE_LOOKUP_FAILED
    assert result.push_result.error == ERROR_TEMPLATE_LOOKUP_FAILED


async def test_user_lookup_failure_falls_back_to_explicit_email(
    seed, make_dispatcher, email_transport, monkeypatch
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.EMAIL, body="Hi {{first_name}}")
    dispatcher = make_dispatcher(email=email_transport)
    monkeypatch.setattr(UserRepository, "get", _database_down)

    result = await dispatcher.dispatch(
        NotificationRequest(
            type=TemplateType.CUSTOM,
            user_id=user.id,
            email="fallback@example.com",
            send_push=False,
        )
    )

    assert result.success is True
    assert email_transport.sent[0]["to"] == "fallback@example.com"
    assert email_transport.sent[0]["body"] == "Hi {{first_name}}"


async def test_push_is_kept_in_the_inbox_even_without_tokens(
    db_session, seed, make_dispatcher, push_transport
) -> None:
    user = seed.user()
    seed.template(
        TemplateType.ORDER_STATUS, Channel.PUSH, subject="{{title}}", body="Order {{order_id}}"
    )
    dispatcher = make_dispatcher(push=push_transport, inbox=True)

    result = await dispatcher.dispatch(
        NotificationRequest(
            type=TemplateType.ORDER_STATUS,
            user_id=user.id,
            title="Order shipped",
            data={"order_id": 7},
            send_email=False,
        )
    )

    assert result.push_result.error == ERROR_NO_TOKENS
    [entry] = UserNotificationRepository(db_session).list_for_user(user.id)
    assert entry.title == "Order shipped"
    assert entry.body == "Order 7"
    assert entry.type == "order_status"
    assert entry.data == {"order_id": 7}
    assert entry.is_read is False


async def test_inbox_is_not_written_without_a_push_template(
    db_session, seed, make_dispatcher, email_transport
) -> None:
    user = seed.user()
    seed.template(TemplateType.CUSTOM, Channel.EMAIL)
    dispatcher = make_dispatcher(email=email_transport, inbox=True)

    await dispatcher.dispatch(NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id))

    assert UserNotificationRepository(db_session).list_for_user(user.id) == []


async def test_inbox_failure_does_not_change_the_result(
    seed, make_dispatcher, push_transport, monkeypatch
) -> None:
    user = seed.user()
    seed.token(user.id, "device-token-123456")
    seed.template(TemplateType.CUSTOM, Channel.PUSH)
    dispatcher = make_dispatcher(push=push_transport, inbox=True)
    monkeypatch.setattr(UserNotificationRepository, "create", _database_down)

    result = await dispatcher.dispatch(
        NotificationRequest(type=TemplateType.CUSTOM, user_id=user.id, send_email=False)
    )

    assert result.success is True
    assert result.push_result.sent_count == 1
