"""Persistence helpers for the in-app notification inbox."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import UserNotification
from app.infrastructure.models import UserNotificationModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class UserNotificationRepository:
    """Store and read :class:`UserNotification` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: UserNotification) -> UserNotification:
        model = UserNotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            body=notification.body,
            type=notification.type,
            data=dict(notification.data),
            created_at=notification.created_at or now_in_app_timezone(),
            read_at=notification.read_at,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[UserNotification]:
        query = self.session.query(UserNotificationModel).filter(
            UserNotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(UserNotificationModel.read_at.is_(None))
        query = query.order_by(
            UserNotificationModel.created_at.desc(), UserNotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def mark_as_read(self, notification_id: int, *, user_id: str) -> UserNotification | None:
        model = (
            self.session.query(UserNotificationModel)
            .filter(
                UserNotificationModel.id == notification_id,
                UserNotificationModel.user_id == user_id,
            )
            .one_or_none()
        )
        if model is None:
            return None
        if model.read_at is None:
            model.read_at = now_in_app_timezone()
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserNotificationModel) -> UserNotification:
        return UserNotification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            body=model.body,
            type=model.type,
            data=dict(model.data or {}),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["UserNotificationRepository"]
