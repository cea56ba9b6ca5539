"""Use case for listing message templates."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import coerce_channel
from app.domain.entities import Channel, MessageTemplate
from app.infrastructure.repositories import MessageTemplateRepository


def list_message_templates(
    session: Session, *, channel: Channel | str | None = None
) -> Sequence[MessageTemplate]:
    """Return templates, newest first, optionally restricted to ``channel``."""

    repository = MessageTemplateRepository(session)
    return repository.list(channel=coerce_channel(channel) if channel else None)
