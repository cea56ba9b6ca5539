"""Read-only diagnostics for the push tokens registered by a user."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.domain.entities import Channel, User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import DeliveryLogRepository, DeviceTokenRepository
from app.infrastructure.transports import NotificationTransports
from app.interfaces.api.dependencies import get_notification_transports, require_admin
from app.interfaces.api.schemas import (
    DeliveryLogRead,
    DeviceTokenStatus,
    DeviceTokenSummary,
)

router = APIRouter(prefix="/device-tokens", tags=["device-tokens"])

RECENT_PUSH_LOGS = 10


@router.get("/status", response_model=DeviceTokenStatus)
def device_token_status(
    user_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    transports: NotificationTransports = Depends(get_notification_transports),
    _: User = Depends(require_admin),
) -> DeviceTokenStatus:
    """Return masked tokens and recent push attempts for ``user_id``."""

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required parameter: user_id",
        )

    tokens = DeviceTokenRepository(db).list_for_user(user_id)
    logs = DeliveryLogRepository(db).list(
        user_id=user_id, channel=Channel.PUSH.value, limit=RECENT_PUSH_LOGS
    )
    return DeviceTokenStatus(
        user_id=user_id,
        push_enabled=transports.push is not None,
        tokens_count=len(tokens),
        tokens=[
            DeviceTokenSummary(
                token=token.masked(),
                device_info=token.device_info,
                created_at=token.created_at,
            )
            for token in tokens
        ],
        recent_logs=[DeliveryLogRead.model_validate(entry) for entry in logs],
    )
