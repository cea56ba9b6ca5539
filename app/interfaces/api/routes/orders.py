"""Endpoints for placing orders and updating their status."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.orders import create_order, update_order_status
from app.config import Settings, get_settings
from app.domain.entities import User
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_dispatcher,
    require_admin,
)
from app.interfaces.api.schemas import (
    OrderCreate,
    OrderCreateResponse,
    OrderRead,
    OrderStatusResponse,
    OrderStatusUpdate,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreateResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher | None = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> OrderCreateResponse:
    """Create an order and send the order confirmation.

    Customers may only order for themselves; administrators may order for anyone.
    """

    if payload.user_id != current_user.id and not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )

    try:
        order, notification = await create_order(
            db,
            dispatcher,
            user_id=payload.user_id,
            items=[item.model_dump(mode="json", exclude_none=True) for item in payload.items],
            total=payload.total,
            currency=payload.currency,
            address=payload.address,
            city=payload.city,
            state=payload.state,
            postal_code=payload.postal_code,
            country=payload.country,
            payment_id=payload.payment_id,
            payment_method=payload.payment_method,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return OrderCreateResponse(
        success=True,
        order=OrderRead.model_validate(order),
        notification=notification,
    )


@router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def change_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher | None = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
    _: User = Depends(require_admin),
) -> OrderStatusResponse:
    """Update the order status and notify the customer.

    The response is successful whenever the status was stored, whatever the
    notification outcome reported under ``notification``.
    """

    try:
        order, notification = await update_order_status(
            db,
            dispatcher,
            order_id=order_id,
            status=payload.status,
            store_base_url=settings.store_base_url,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return OrderStatusResponse(
        success=True,
        order=OrderRead.model_validate(order),
        notification=notification,
    )
