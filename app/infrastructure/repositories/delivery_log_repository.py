"""Persistence helpers for delivery log entries."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import DeliveryLog
from app.infrastructure.models import DeliveryLogModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class DeliveryLogRepository:
    """Append and query :class:`DeliveryLog` entries.

    Entries are never updated once written.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: DeliveryLog) -> DeliveryLog:
        model = DeliveryLogModel(
            recipient=entry.recipient,
            channel=entry.channel,
            template_type=entry.template_type,
            success=entry.success,
            provider_message_id=entry.provider_message_id,
            error=entry.error,
            user_id=entry.user_id,
            created_at=entry.created_at or now_in_app_timezone(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list(
        self,
        *,
        recipient: str | None = None,
        channel: str | None = None,
        user_id: str | None = None,
        exclude_error: str | None = None,
        limit: int | None = 50,
    ) -> Sequence[DeliveryLog]:
        query = self.session.query(DeliveryLogModel)
        if recipient is not None:
            query = query.filter(DeliveryLogModel.recipient == recipient)
        if channel is not None:
            query = query.filter(DeliveryLogModel.channel == channel)
        if user_id is not None:
            query = query.filter(DeliveryLogModel.user_id == user_id)
        if exclude_error is not None:
            query = query.filter(
                or_(
                    DeliveryLogModel.error.is_(None),
                    DeliveryLogModel.error != exclude_error,
                )
            )
        query = query.order_by(
            DeliveryLogModel.created_at.desc(), DeliveryLogModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: DeliveryLogModel) -> DeliveryLog:
        return DeliveryLog(
            id=model.id,
            recipient=model.recipient,
            channel=model.channel,
            template_type=model.template_type,
            success=bool(model.success),
            provider_message_id=model.provider_message_id,
            error=model.error,
            user_id=model.user_id,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DeliveryLogRepository"]
