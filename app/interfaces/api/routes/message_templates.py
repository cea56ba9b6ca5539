"""Endpoints for administering notification message templates."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.message_templates import (
    create_message_template,
    get_message_template,
    get_template_status,
    list_message_templates,
    update_message_template,
)
from app.domain.entities import Channel, User
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import (
    DeliveryLogRead,
    EmailTemplateCreate,
    MessageTemplateRead,
    MessageTemplateUpdate,
    PushTemplateCreate,
    TemplateChannelStatus,
)

router = APIRouter(prefix="/templates", tags=["templates"])


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/email", response_model=list[MessageTemplateRead])
def list_email_templates(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[MessageTemplateRead]:
    templates = list_message_templates(db, channel=Channel.EMAIL)
    return [MessageTemplateRead.model_validate(template) for template in templates]


@router.post(
    "/email", response_model=MessageTemplateRead, status_code=status.HTTP_201_CREATED
)
def create_email_template(
    payload: EmailTemplateCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageTemplateRead:
    """Create an email template; ``subject`` and ``body`` may use ``{{variables}}``."""

    try:
        template = create_message_template(
            db,
            name=payload.name,
            template_type=payload.type,
            channel=Channel.EMAIL,
            subject=payload.subject,
            body=payload.body,
            is_active=payload.is_active,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return MessageTemplateRead.model_validate(template)


@router.get("/push", response_model=list[MessageTemplateRead])
def list_push_templates(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[MessageTemplateRead]:
    templates = list_message_templates(db, channel=Channel.PUSH)
    return [MessageTemplateRead.model_validate(template) for template in templates]


@router.post(
    "/push", response_model=MessageTemplateRead, status_code=status.HTTP_201_CREATED
)
def create_push_template(
    payload: PushTemplateCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageTemplateRead:
    """Create a push template; the ``title`` is stored as the template subject."""

    try:
        template = create_message_template(
            db,
            name=payload.name,
            template_type=payload.type,
            channel=Channel.PUSH,
            subject=payload.title,
            body=payload.body,
            is_active=payload.is_active,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return MessageTemplateRead.model_validate(template)


@router.get("/status")
def template_status(
    template_type: str | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    """Report which template is active for each type and channel."""

    try:
        summary = get_template_status(db, template_type=template_type)
    except ValidationError as exc:
        raise _bad_request(exc) from exc

    return {
        "success": True,
        "templates": [
            TemplateChannelStatus(**entry).model_dump() for entry in summary["templates"]
        ],
        "recent_logs": [
            DeliveryLogRead.model_validate(entry).model_dump(mode="json")
            for entry in summary["recent_logs"]
        ],
        "template_types": summary["template_types"],
    }


@router.get("/{template_id}", response_model=MessageTemplateRead)
def read_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageTemplateRead:
    try:
        template = get_message_template(db, template_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MessageTemplateRead.model_validate(template)


@router.put("/{template_id}", response_model=MessageTemplateRead)
def edit_template(
    template_id: int,
    payload: MessageTemplateUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageTemplateRead:
    try:
        template = update_message_template(
            db,
            template_id=template_id,
            name=payload.name,
            template_type=payload.type,
            subject=payload.subject,
            body=payload.body,
            is_active=payload.is_active,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return MessageTemplateRead.model_validate(template)
