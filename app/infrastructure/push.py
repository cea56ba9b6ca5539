"""Firebase Cloud Messaging transport for push notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import firebase_admin
from firebase_admin import credentials, messaging

from app.config import Settings
from app.domain.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

_APP_NAME = "storefront-notifications"
_INVALID_TOKEN_MARKERS = (
    "Requested entity was not found",
    "not a valid FCM registration token",
)


@dataclass
class TokenDelivery:
    """Provider verdict for a single device token."""

    token: str
    success: bool
    message_id: str | None = None
    error: str | None = None
    unregistered: bool = False


def _initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Get or initialize the Firebase Admin app used for messaging."""

    try:
        return firebase_admin.get_app(_APP_NAME)
    except ValueError:
        pass

    try:
        if settings.firebase_credentials_path:
            cred = credentials.Certificate(settings.firebase_credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        app = firebase_admin.initialize_app(cred, options=options, name=_APP_NAME)
    except (ValueError, OSError) as exc:
        raise ConfigurationError(f"Failed to initialize Firebase: {exc}") from exc

    logger.info("Firebase Admin SDK initialized")
    return app


def _stringify_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    # FCM data payloads only accept string values.
    return {str(key): "" if value is None else str(value) for key, value in (data or {}).items()}


def _is_unregistered(exc: BaseException | None) -> bool:
    if exc is None:
        return False
    if isinstance(exc, messaging.UnregisteredError):
        return True
    text = str(exc)
    return any(marker in text for marker in _INVALID_TOKEN_MARKERS)


class FirebasePushTransport:
    """Send one notification to many device tokens through FCM."""

    def __init__(self, app: firebase_admin.App) -> None:
        self._app = app

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirebasePushTransport":
        return cls(_initialize_firebase_app(settings))

    def send_multicast(
        self,
        tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> list[TokenDelivery]:
        """Deliver the notification to every token independently.

        Raises :class:`TransportError` only when the batch request as a whole
        fails; per-token rejections are reported in the returned list.
        """

        if not tokens:
            return []

        message = messaging.MulticastMessage(
            tokens=list(tokens),
            notification=messaging.Notification(title=title, body=body),
            data=_stringify_data(data),
        )

        try:
            batch = messaging.send_each_for_multicast(message, app=self._app)
        except Exception as exc:
            logger.exception("FCM multicast request failed")
            raise TransportError(f"FCM request failed: {exc}") from exc

        deliveries: list[TokenDelivery] = []
        for token, response in zip(tokens, batch.responses):
            if response.success:
                deliveries.append(
                    TokenDelivery(token=token, success=True, message_id=response.message_id)
                )
                continue
            unregistered = _is_unregistered(response.exception)
            if unregistered:
                logger.warning("Invalid FCM token, should be removed: %s...", token[:20])
            deliveries.append(
                TokenDelivery(
                    token=token,
                    success=False,
                    error=str(response.exception) if response.exception else "unknown_error",
                    unregistered=unregistered,
                )
            )

        logger.info(
            "FCM multicast finished: %s sent, %s failed",
            batch.success_count,
            batch.failure_count,
        )
        return deliveries


__all__ = ["FirebasePushTransport", "TokenDelivery"]
