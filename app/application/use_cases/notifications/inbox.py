"""Read access to the in-app notification inbox of a user."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import UserNotification
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import UserNotificationRepository


def list_user_notifications(
    session: Session,
    *,
    user_id: str,
    unread_only: bool = False,
    limit: int = 50,
) -> Sequence[UserNotification]:
    return UserNotificationRepository(session).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )


def mark_user_notification_read(
    session: Session, *, notification_id: int, user_id: str
) -> UserNotification:
    """Mark one of the user's notifications as read.

    Notifications that belong to somebody else are reported as missing.
    """

    notification = UserNotificationRepository(session).mark_as_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


__all__ = ["list_user_notifications", "mark_user_notification_read"]
