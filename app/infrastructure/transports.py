"""Construction of the provider transports used by the notification subsystem."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import Settings
from app.domain.errors import ConfigurationError
from app.infrastructure.email import SendGridEmailTransport
from app.infrastructure.push import FirebasePushTransport

logger = logging.getLogger(__name__)


@dataclass
class NotificationTransports:
    """Provider handles shared by every request of the process.

    ``error`` is set when the subsystem could not be configured; in that case
    no notification is attempted until the configuration is fixed.
    """

    email: Any | None
    push: Any | None
    error: str | None = None

    @property
    def available(self) -> bool:
        return self.error is None


def build_notification_transports(settings: Settings) -> NotificationTransports:
    """Create the email and push transports described by ``settings``."""

    try:
        email = SendGridEmailTransport.from_settings(settings)
        push = FirebasePushTransport.from_settings(settings) if settings.push_enabled else None
    except ConfigurationError as exc:
        logger.error("Notification subsystem disabled: %s", exc)
        return NotificationTransports(email=None, push=None, error=str(exc))

    if push is None:
        logger.info("Push notifications disabled by configuration")
    return NotificationTransports(email=email, push=push)


__all__ = ["NotificationTransports", "build_notification_transports"]
