"""Persistence layer for notification message templates."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Channel, MessageTemplate, TemplateType
from app.infrastructure.models import MessageTemplateModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class MessageTemplateRepository:
    """Provide CRUD operations for :class:`MessageTemplate` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        channel: Channel | None = None,
        template_type: TemplateType | None = None,
    ) -> Sequence[MessageTemplate]:
        query = self.session.query(MessageTemplateModel)
        if channel is not None:
            query = query.filter(MessageTemplateModel.channel == channel.value)
        if template_type is not None:
            query = query.filter(MessageTemplateModel.type == template_type.value)
        query = query.order_by(
            MessageTemplateModel.created_at.desc(), MessageTemplateModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active(
        self, template_type: TemplateType, channel: Channel
    ) -> Sequence[MessageTemplate]:
        """Return active templates for the pair, most recently touched first."""

        query = (
            self.session.query(MessageTemplateModel)
            .filter(MessageTemplateModel.type == template_type.value)
            .filter(MessageTemplateModel.channel == channel.value)
            .filter(MessageTemplateModel.is_active.is_(True))
            .order_by(
                func.coalesce(
                    MessageTemplateModel.updated_at, MessageTemplateModel.created_at
                ).desc(),
                MessageTemplateModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, template_id: int) -> MessageTemplate | None:
        model = self.session.get(MessageTemplateModel, template_id)
        return self._to_entity(model) if model else None

    def create(self, template: MessageTemplate) -> MessageTemplate:
        model = MessageTemplateModel()
        self._apply_entity_to_model(model, template)
        model.created_at = template.created_at or now_in_app_timezone()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, template: MessageTemplate) -> MessageTemplate:
        if template.id is None:
            raise ValueError("Template id is required for updates")
        model = self.session.get(MessageTemplateModel, template.id)
        if model is None:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template)
        model.updated_at = now_in_app_timezone()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: MessageTemplateModel, template: MessageTemplate
    ) -> None:
        model.name = template.name
        model.type = TemplateType(template.type).value
        model.channel = Channel(template.channel).value
        model.subject = template.subject
        model.body = template.body
        model.is_active = template.is_active

    @staticmethod
    def _to_entity(model: MessageTemplateModel) -> MessageTemplate:
        return MessageTemplate(
            id=model.id,
            name=model.name,
            type=TemplateType(model.type),
            channel=Channel(model.channel),
            subject=model.subject,
            body=model.body,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["MessageTemplateRepository"]
