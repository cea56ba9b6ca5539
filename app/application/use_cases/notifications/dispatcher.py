"""Orchestration of template lookup, substitution and channel delivery."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

import anyio
from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import (
    Channel,
    DeliveryLog,
    DispatchResult,
    EmailResult,
    MessageTemplate,
    NotificationRequest,
    PushResult,
    TemplateType,
    User,
    UserNotification,
    VariableValue,
)
from app.domain.errors import TemplateNotFoundError
from app.infrastructure.repositories import (
    DeliveryLogRepository,
    MessageTemplateRepository,
    UserNotificationRepository,
    UserRepository,
)

from .senders import ERROR_NO_TOKENS, EmailSender, PushSender
from .substitution import substitute
from .templates import coerce_template_type, resolve_template

logger = logging.getLogger(__name__)

ERROR_TEMPLATE_MISSING = "template_missing"
ERROR_NO_RECIPIENT = "no_recipient"
ERROR_SUPPRESSED = "suppressed"
ERROR_TEMPLATE_LOOKUP_FAILED = "template_lookup_failed"


class NotificationDispatcher:
    """Deliver a :class:`NotificationRequest` over the requested channels.

    Channels are independent: a missing template or a failed send on one of
    them never prevents the other from being attempted, and no failure is
    raised to the caller. Every attempt is appended to the delivery log. When an
    inbox repository is given, every push addressed to a user with an active
    push template is also kept in that user's in-app inbox, whatever the
    provider outcome.
    """

    def __init__(
        self,
        *,
        templates: MessageTemplateRepository,
        logs: DeliveryLogRepository,
        users: UserRepository,
        email_sender: EmailSender,
        push_sender: PushSender,
        suppress_after_no_token_failures: int | None = None,
        inbox: UserNotificationRepository | None = None,
    ) -> None:
        self._templates = templates
        self._logs = logs
        self._users = users
        self._email_sender = email_sender
        self._push_sender = push_sender
        self._suppress_after = suppress_after_no_token_failures
        self._inbox = inbox

    async def dispatch(self, request: NotificationRequest) -> DispatchResult:
        template_type = coerce_template_type(request.type)
        user = self._load_user(request.user_id) if request.user_id else None
        variables = self._build_variables(request, user)

        email_result: EmailResult | None = None
        push_result: PushResult | None = None
        inbox_entry: UserNotification | None = None
        jobs: list[Callable[[], Awaitable[None]]] = []

        if request.send_email:
            recipient = request.email or (user.email if user else None)
            template, lookup_error = self._resolve(template_type, Channel.EMAIL)
            if recipient is None:
                email_result = EmailResult(success=False, error=ERROR_NO_RECIPIENT)
            elif template is None:
                email_result = EmailResult(
                    success=False, recipient=recipient, error=lookup_error
                )
            else:
                email_subject = substitute(template.subject, variables)
                email_body = substitute(template.body, variables)

                async def _send_email() -> None:
                    nonlocal email_result
                    email_result = await self._email_sender.send(
                        recipient, email_subject, email_body
                    )

                jobs.append(_send_email)

        if request.send_push:
            template, lookup_error = self._resolve(template_type, Channel.PUSH)
            if not request.user_id:
                push_result = PushResult(success=False, error=ERROR_NO_RECIPIENT)
            elif template is None:
                push_result = PushResult(success=False, error=lookup_error)
            else:
                push_title = substitute(template.subject, variables)
                push_body = substitute(template.body, variables)
                user_id = request.user_id
                inbox_entry = UserNotification(
                    id=None,
                    user_id=user_id,
                    title=push_title,
                    body=push_body,
                    type=template_type.value,
                    data=dict(request.data),
                )
                if self._is_push_suppressed(user_id):
                    logger.info(
                        "Push suppressed for user %s after repeated no-token failures",
                        user_id,
                    )
                    push_result = PushResult(success=False, error=ERROR_SUPPRESSED)
                else:

                    async def _send_push() -> None:
                        nonlocal push_result
                        push_result = await self._push_sender.send(
                            user_id, push_title, push_body, request.data
                        )

                    jobs.append(_send_push)

        if jobs:
            async with anyio.create_task_group() as task_group:
                for job in jobs:
                    task_group.start_soon(job)

        if email_result is not None:
            self._record(
                recipient=email_result.recipient or request.user_id or "unknown",
                channel=Channel.EMAIL,
                template_type=template_type.value,
                success=email_result.success,
                provider_message_id=email_result.message_id,
                error=email_result.error,
                user_id=request.user_id,
            )
        if push_result is not None:
            self._record(
                recipient=request.user_id or "unknown",
                channel=Channel.PUSH,
                template_type=template_type.value,
                success=push_result.success,
                provider_message_id=",".join(push_result.message_ids) or None,
                error=push_result.error,
                user_id=request.user_id,
            )
        if inbox_entry is not None and self._inbox is not None:
            self._save_to_inbox(inbox_entry)

        success = any(
            result.success for result in (email_result, push_result) if result is not None
        )
        logger.info(
            "Dispatched %s notification (user=%s): success=%s email=%s push=%s",
            template_type.value,
            request.user_id,
            success,
            None if email_result is None else email_result.success,
            None if push_result is None else push_result.success,
        )
        return DispatchResult(
            success=success, email_result=email_result, push_result=push_result
        )

    @staticmethod
    def _build_variables(
        request: NotificationRequest, user: User | None
    ) -> dict[str, VariableValue]:
        variables: dict[str, VariableValue] = {}
        if user is not None:
            variables.update(
                {
                    "first_name": user.first_name,
                    "last_name": user.last_name,
                    "email": user.email,
                }
            )
        variables.update(request.template_variables())
        return variables

    def _load_user(self, user_id: str) -> User | None:
        try:
            return self._users.get(user_id)
        except SQLAlchemyError:
            logger.exception("Failed to load user %s for notification variables", user_id)
            self._users.session.rollback()
            return None

    def _resolve(
        self, template_type: TemplateType, channel: Channel
    ) -> tuple[MessageTemplate | None, str | None]:
        """Return the active template, or ``None`` with the channel error code."""

        try:
            return resolve_template(self._templates, template_type, channel), None
        except TemplateNotFoundError as exc:
            logger.warning("%s", exc)
            return None, ERROR_TEMPLATE_MISSING
        except SQLAlchemyError:
            logger.exception(
                "Failed to load %s template for %s", channel.value, template_type.value
            )
            self._templates.session.rollback()
            return None, ERROR_TEMPLATE_LOOKUP_FAILED

    def _is_push_suppressed(self, user_id: str) -> bool:
        if not self._suppress_after:
            return False
        try:
            recent = self._logs.list(
                user_id=user_id,
                channel=Channel.PUSH.value,
                exclude_error=ERROR_SUPPRESSED,
                limit=self._suppress_after,
            )
        except SQLAlchemyError:
            logger.exception("Failed to read push history for user %s", user_id)
            self._logs.session.rollback()
            return False
        return len(recent) >= self._suppress_after and all(
            not entry.success and entry.error == ERROR_NO_TOKENS for entry in recent
        )

    def _save_to_inbox(self, entry: UserNotification) -> None:
        try:
            self._inbox.create(entry)
        except SQLAlchemyError:
            logger.exception("Failed to store inbox notification for user %s", entry.user_id)
            self._inbox.session.rollback()

    def _record(
        self,
        *,
        recipient: str,
        channel: Channel,
        template_type: str,
        success: bool,
        provider_message_id: str | None,
        error: str | None,
        user_id: str | None,
    ) -> None:
        entry = DeliveryLog(
            id=None,
            recipient=recipient,
            channel=channel.value,
            template_type=template_type,
            success=success,
            provider_message_id=provider_message_id,
            error=error,
            user_id=user_id,
        )
        try:
            self._logs.create(entry)
        except SQLAlchemyError:
            logger.exception("Failed to record %s delivery log for %s", channel.value, recipient)
            self._logs.session.rollback()


__all__ = [
    "ERROR_NO_RECIPIENT",
    "ERROR_SUPPRESSED",
    "ERROR_TEMPLATE_LOOKUP_FAILED",
    "ERROR_TEMPLATE_MISSING",
    "NotificationDispatcher",
]
