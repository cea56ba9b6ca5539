"""Use case for editing a message template."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import coerce_template_type
from app.domain.entities import MessageTemplate, TemplateType
from app.domain.errors import ValidationError
from app.infrastructure.repositories import MessageTemplateRepository

from .get_message_template import get_message_template


def update_message_template(
    session: Session,
    *,
    template_id: int,
    name: str | None = None,
    template_type: TemplateType | str | None = None,
    subject: str | None = None,
    body: str | None = None,
    is_active: bool | None = None,
) -> MessageTemplate:
    """Apply the provided changes; the channel of a template is fixed."""

    current = get_message_template(session, template_id)

    changes: dict[str, object] = {}
    for field_name, value in (("name", name), ("subject", subject), ("body", body)):
        if value is None:
            continue
        if not value.strip():
            raise ValidationError(f"Field '{field_name}' cannot be empty")
        changes[field_name] = value.strip()
    if template_type is not None:
        changes["type"] = coerce_template_type(template_type)
    if is_active is not None:
        changes["is_active"] = is_active

    if not changes:
        return current
    return MessageTemplateRepository(session).update(replace(current, **changes))
