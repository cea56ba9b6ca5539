"""Endpoints for notification dispatch, delivery logs and the in-app inbox."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    EmailSender,
    NotificationDispatcher,
    coerce_channel,
    coerce_template_type,
    list_user_notifications,
    mark_user_notification_read,
    send_templated_email,
)
from app.domain.entities import NotificationRequest, User
from app.domain.errors import NotFoundError, TemplateNotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import DeliveryLogRepository
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_dispatcher,
    get_email_sender,
    require_admin,
)
from app.interfaces.api.schemas import (
    DeliveryLogRead,
    NotificationSendRequest,
    TemplatedEmailRequest,
    UserNotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post("/send")
async def send_notification(
    payload: NotificationSendRequest,
    dispatcher: NotificationDispatcher | None = Depends(get_dispatcher),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    """Dispatch a notification over email and/or push and return the outcome."""

    try:
        template_type = coerce_template_type(payload.type)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification service is not configured",
        )

    result = await dispatcher.dispatch(
        NotificationRequest(
            type=template_type,
            user_id=payload.user_id,
            title=payload.title,
            body=payload.body,
            data=dict(payload.data),
            send_email=payload.email,
            send_push=payload.push,
        )
    )
    return result.to_dict()


@router.get("/logs", response_model=list[DeliveryLogRead])
def list_delivery_logs(
    recipient: str | None = Query(default=None),
    channel: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[DeliveryLogRead]:
    """Return the most recent delivery attempts, newest first."""

    try:
        channel_value = coerce_channel(channel).value if channel else None
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logs = DeliveryLogRepository(db).list(
        recipient=recipient, channel=channel_value, limit=limit
    )
    return [DeliveryLogRead.model_validate(entry) for entry in logs]


@router.post("/email")
async def send_email(
    payload: TemplatedEmailRequest,
    db: Session = Depends(get_db),
    sender: EmailSender | None = Depends(get_email_sender),
    _: User = Depends(require_admin),
) -> Any:
    """Send the active email template of ``templateType`` to a single address."""

    if sender is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Email service is not configured",
        )

    try:
        result = await send_templated_email(
            db,
            sender,
            to=payload.to,
            template_type=payload.template_type,
            variables=payload.variables,
        )
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not result.success:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=result.to_dict())
    return result.to_dict()


@router.get("/inbox", response_model=list[UserNotificationRead])
def list_inbox(
    unread: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[UserNotificationRead]:
    """Return the authenticated user's in-app notifications, newest first."""

    notifications = list_user_notifications(
        db, user_id=current_user.id, unread_only=unread, limit=limit
    )
    return [UserNotificationRead.model_validate(entry) for entry in notifications]


@router.post("/inbox/{notification_id}/read", response_model=UserNotificationRead)
def mark_inbox_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UserNotificationRead:
    try:
        notification = mark_user_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return UserNotificationRead.model_validate(notification)
