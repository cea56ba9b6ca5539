"""Templated email sent straight to an address, outside the dispatch flow."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Channel, DeliveryLog, EmailResult, TemplateType, VariableValue
from app.domain.errors import ValidationError
from app.infrastructure.repositories import DeliveryLogRepository, MessageTemplateRepository

from .senders import EmailSender
from .substitution import substitute
from .templates import resolve_template

logger = logging.getLogger(__name__)


async def send_templated_email(
    session: Session,
    sender: EmailSender,
    *,
    to: str,
    template_type: TemplateType | str,
    variables: Mapping[str, VariableValue],
) -> EmailResult:
    """Render the active email template for ``template_type`` and send it to ``to``.

    Raises :class:`TemplateNotFoundError` when no email template is active; a
    failed send is reported in the returned result and appended to the
    delivery log.
    """

    if not to or not to.strip():
        raise ValidationError("Recipient is required")

    template = resolve_template(MessageTemplateRepository(session), template_type, Channel.EMAIL)
    subject = substitute(template.subject, variables)
    body = substitute(template.body, variables)

    result = await sender.send(to, subject, body)

    logs = DeliveryLogRepository(session)
    try:
        logs.create(
            DeliveryLog(
                id=None,
                recipient=to,
                channel=Channel.EMAIL.value,
                template_type=template.type.value,
                success=result.success,
                provider_message_id=result.message_id,
                error=result.error,
            )
        )
    except SQLAlchemyError:
        logger.exception("Failed to record email delivery log for %s", to)
        session.rollback()

    return result


__all__ = ["send_templated_email"]
