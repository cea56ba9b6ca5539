"""SendGrid transport used to deliver transactional notification emails."""

from __future__ import annotations

import json
import logging
import threading
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import Settings
from app.domain.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_sendgrid_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return "SendGrid API request failed"


def _extract_message_id(response: Any) -> str | None:
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    try:
        message_id = headers.get("X-Message-Id")
    except AttributeError:
        return None
    return str(message_id) if message_id else None


class SendGridEmailTransport:
    """Send HTML emails through the SendGrid v3 REST API.

    The underlying :class:`SendGridAPIClient` is created on first use and then
    reused for the lifetime of the transport.
    """

    def __init__(self, api_key: str, sender: str) -> None:
        self._api_key = api_key
        self.sender = sender
        self._client: SendGridAPIClient | None = None
        self._client_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridEmailTransport":
        if not (settings.sendgrid_api_key and settings.sendgrid_sender):
            raise ConfigurationError(
                "SENDGRID_API_KEY and SENDGRID_SENDER are required to send email"
            )
        return cls(settings.sendgrid_api_key, settings.sendgrid_sender)

    def _get_client(self) -> SendGridAPIClient:
        with self._client_lock:
            if self._client is None:
                self._client = SendGridAPIClient(self._api_key)
            return self._client

    def send(self, to: str, subject: str, html_content: str) -> str | None:
        """Deliver one message and return the provider message id.

        Raises :class:`TransportError` when SendGrid rejects the request or the
        call itself fails.
        """

        message = Mail(
            from_email=self.sender,
            to_emails=to,
            subject=subject,
            html_content=html_content,
        )

        try:
            response = self._get_client().send(message)
        except Exception as exc:
            description = _describe_sendgrid_failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None)
            )
            logger.error("%s (recipient %s)", description, to)
            raise TransportError(
                description, status_code=getattr(exc, "status_code", None)
            ) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_sendgrid_failure(
                status_code, getattr(response, "body", None)
            )
            logger.error("%s (recipient %s)", description, to)
            raise TransportError(description, status_code=status_code)

        message_id = _extract_message_id(response)
        logger.info("Email accepted by SendGrid for %s (message id %s)", to, message_id)
        return message_id


__all__ = ["SendGridEmailTransport"]
