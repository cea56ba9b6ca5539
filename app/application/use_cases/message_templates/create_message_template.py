"""Use case for creating notification message templates."""

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import coerce_channel, coerce_template_type
from app.domain.entities import Channel, MessageTemplate, TemplateType
from app.domain.errors import ValidationError
from app.infrastructure.repositories import MessageTemplateRepository


def _require(value: str | None, field_name: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise ValidationError(f"Missing required field: {field_name}")
    return normalized


def create_message_template(
    session: Session,
    *,
    name: str,
    template_type: TemplateType | str,
    channel: Channel | str,
    subject: str,
    body: str,
    is_active: bool = True,
) -> MessageTemplate:
    """Store a new template for ``channel``.

    ``subject`` is the email subject or, for push templates, the title.
    """

    channel = coerce_channel(channel)
    template = MessageTemplate(
        id=None,
        name=_require(name, "name"),
        type=coerce_template_type(template_type),
        channel=channel,
        subject=_require(subject, "subject" if channel is Channel.EMAIL else "title"),
        body=_require(body, "body"),
        is_active=is_active,
    )
    return MessageTemplateRepository(session).create(template)
