"""Resolution of the active message template for an event and channel."""

from __future__ import annotations

import logging

from app.domain.entities import Channel, MessageTemplate, TemplateType
from app.domain.errors import TemplateNotFoundError, ValidationError
from app.infrastructure.repositories import MessageTemplateRepository

logger = logging.getLogger(__name__)


def coerce_template_type(value: TemplateType | str) -> TemplateType:
    try:
        return TemplateType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown template type: {value}") from exc


def coerce_channel(value: Channel | str) -> Channel:
    try:
        return Channel(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown channel: {value}") from exc


def resolve_template(
    repository: MessageTemplateRepository,
    template_type: TemplateType | str,
    channel: Channel | str,
) -> MessageTemplate:
    """Return the active template for ``template_type`` on ``channel``.

    When more than one active template matches, the most recently updated one
    is used. Raises :class:`TemplateNotFoundError` when none is active.
    """

    template_type = coerce_template_type(template_type)
    channel = coerce_channel(channel)

    candidates = repository.list_active(template_type, channel)
    if not candidates:
        raise TemplateNotFoundError(template_type.value, channel.value)
    if len(candidates) > 1:
        logger.warning(
            "%s active %s templates for type %s; using template %s",
            len(candidates),
            channel.value,
            template_type.value,
            candidates[0].id,
        )
    return candidates[0]


__all__ = ["coerce_channel", "coerce_template_type", "resolve_template"]
