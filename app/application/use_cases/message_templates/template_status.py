"""Use case summarising which templates are active for each event."""

from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import coerce_template_type
from app.domain.entities import Channel, TemplateType
from app.infrastructure.repositories import (
    DeliveryLogRepository,
    MessageTemplateRepository,
)

RECENT_LOG_LIMIT = 10


def get_template_status(
    session: Session, *, template_type: TemplateType | str | None = None
) -> dict[str, Any]:
    """Return the active template per type and channel plus recent deliveries.

    Bodies are reduced to a short preview.
    """

    templates = MessageTemplateRepository(session)
    types = [coerce_template_type(template_type)] if template_type else list(TemplateType)

    active: list[dict[str, Any]] = []
    for current_type in types:
        for channel in Channel:
            candidates = templates.list_active(current_type, channel)
            template = candidates[0] if candidates else None
            active.append(
                {
                    "type": current_type.value,
                    "channel": channel.value,
                    "active": template is not None,
                    "duplicates": max(len(candidates) - 1, 0),
                    "template_id": template.id if template else None,
                    "name": template.name if template else None,
                    "body_preview": _preview(template.body) if template else None,
                }
            )

    recent_logs = DeliveryLogRepository(session).list(limit=RECENT_LOG_LIMIT)
    return {
        "templates": active,
        "recent_logs": recent_logs,
        "template_types": [item.value for item in TemplateType],
    }


def _preview(body: str, length: int = 100) -> str:
    return body if len(body) <= length else f"{body[:length]}..."
