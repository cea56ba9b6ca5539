"""Channel senders that turn provider outcomes into uniform results."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypeVar

import anyio
from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import EmailResult, PushResult
from app.domain.errors import TransportError
from app.infrastructure.repositories import DeviceTokenRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERROR_TIMEOUT = "timeout"
ERROR_NO_TOKENS = "no_tokens"
ERROR_PUSH_DISABLED = "push_disabled"
ERROR_EMAIL_UNCONFIGURED = "email_unconfigured"
ERROR_ALL_TOKENS_FAILED = "all_tokens_failed"
ERROR_TOKEN_LOOKUP_FAILED = "token_lookup_failed"


class EmailTransport(Protocol):
    def send(self, to: str, subject: str, html_content: str) -> str | None: ...


class PushDelivery(Protocol):
    token: str
    success: bool
    message_id: str | None
    error: str | None
    unregistered: bool


class PushTransport(Protocol):
    def send_multicast(
        self,
        tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> Sequence[PushDelivery]: ...


async def run_with_timeout(timeout: float, func: Callable[..., T], *args: Any) -> T:
    """Run the blocking ``func`` in a worker thread, aborting after ``timeout``.

    Raises :class:`TimeoutError` when the deadline passes; the worker thread is
    abandoned rather than waited for.
    """

    with anyio.fail_after(timeout):
        return await anyio.to_thread.run_sync(
            functools.partial(func, *args), abandon_on_cancel=True
        )


class EmailSender:
    """Send one email and report the outcome without raising."""

    def __init__(self, transport: EmailTransport | None, *, timeout: float) -> None:
        self._transport = transport
        self._timeout = timeout

    async def send(self, to: str, subject: str, body: str) -> EmailResult:
        if self._transport is None:
            return EmailResult(success=False, recipient=to, error=ERROR_EMAIL_UNCONFIGURED)

        try:
            message_id = await run_with_timeout(
                self._timeout, self._transport.send, to, subject, body
            )
        except TimeoutError:
            logger.error("Email to %s aborted after %ss", to, self._timeout)
            return EmailResult(success=False, recipient=to, error=ERROR_TIMEOUT)
        except TransportError as exc:
            return EmailResult(success=False, recipient=to, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while sending email to %s", to)
            return EmailResult(success=False, recipient=to, error=str(exc) or type(exc).__name__)

        return EmailResult(success=True, recipient=to, message_id=message_id)


class PushSender:
    """Fan a push notification out to every device token of a user."""

    def __init__(
        self,
        transport: PushTransport | None,
        tokens: DeviceTokenRepository,
        *,
        timeout: float,
        prune_invalid_tokens: bool = False,
    ) -> None:
        self._transport = transport
        self._tokens = tokens
        self._timeout = timeout
        self._prune_invalid_tokens = prune_invalid_tokens

    async def send(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> PushResult:
        try:
            device_tokens = [token.token for token in self._tokens.list_for_user(user_id)]
        except SQLAlchemyError:
            logger.exception("Failed to load device tokens for user %s", user_id)
            self._tokens.session.rollback()
            return PushResult(success=False, error=ERROR_TOKEN_LOOKUP_FAILED)

        if not device_tokens:
            logger.info("No device tokens registered for user %s", user_id)
            return PushResult(success=False, error=ERROR_NO_TOKENS)

        if self._transport is None:
            return PushResult(success=False, failed_tokens=device_tokens, error=ERROR_PUSH_DISABLED)

        try:
            deliveries = await run_with_timeout(
                self._timeout,
                self._transport.send_multicast,
                device_tokens,
                title,
                body,
                dict(data or {}),
            )
        except TimeoutError:
            logger.error("Push to user %s aborted after %ss", user_id, self._timeout)
            return PushResult(success=False, failed_tokens=device_tokens, error=ERROR_TIMEOUT)
        except TransportError as exc:
            return PushResult(success=False, failed_tokens=device_tokens, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while sending push to user %s", user_id)
            return PushResult(
                success=False,
                failed_tokens=device_tokens,
                error=str(exc) or type(exc).__name__,
            )

        sent = [delivery for delivery in deliveries if delivery.success]
        failed = [delivery for delivery in deliveries if not delivery.success]
        for delivery in failed:
            logger.warning(
                "Push to a device of user %s failed: %s", user_id, delivery.error
            )

        if self._prune_invalid_tokens:
            invalid = [delivery.token for delivery in failed if delivery.unregistered]
            if invalid:
                self._prune(user_id, invalid)

        return PushResult(
            success=bool(sent),
            sent_count=len(sent),
            failed_tokens=[delivery.token for delivery in failed],
            error=None if sent else ERROR_ALL_TOKENS_FAILED,
            message_ids=[delivery.message_id for delivery in sent if delivery.message_id],
        )

    def _prune(self, user_id: str, tokens: Sequence[str]) -> None:
        try:
            removed = self._tokens.delete_tokens(user_id, tokens)
        except SQLAlchemyError:
            logger.exception("Failed to remove invalid device tokens for user %s", user_id)
            self._tokens.session.rollback()
            return
        logger.info("Removed %s invalid device tokens for user %s", removed, user_id)


__all__ = [
    "ERROR_ALL_TOKENS_FAILED",
    "ERROR_EMAIL_UNCONFIGURED",
    "ERROR_NO_TOKENS",
    "ERROR_PUSH_DISABLED",
    "ERROR_TIMEOUT",
    "ERROR_TOKEN_LOOKUP_FAILED",
    "EmailSender",
    "EmailTransport",
    "PushSender",
    "PushTransport",
    "run_with_timeout",
]
