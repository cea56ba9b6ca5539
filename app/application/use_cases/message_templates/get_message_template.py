"""Use case for retrieving a message template."""

from sqlalchemy.orm import Session

from app.domain.entities import MessageTemplate
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import MessageTemplateRepository


def get_message_template(session: Session, template_id: int) -> MessageTemplate:
    """Return the template identified by ``template_id`` or raise an error."""

    template = MessageTemplateRepository(session).get(template_id)
    if template is None:
        raise NotFoundError("Template not found")
    return template
