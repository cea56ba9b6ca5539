"""Use case for placing an order."""

import json
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_after_commit,
)
from app.domain.entities import (
    ORDER_STATUS_PROCESSING,
    NotificationRequest,
    Order,
    TemplateType,
)
from app.domain.errors import ValidationError
from app.infrastructure.repositories import OrderRepository, UserRepository


def _coerce_total(total: Any) -> Decimal:
    try:
        value = Decimal(str(total))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Total must be a number") from exc
    if value <= 0:
        raise ValidationError("Total must be greater than zero")
    return value.quantize(Decimal("0.01"))


def _summarize_items(items: list[dict[str, Any]]) -> str:
    return json.dumps(
        [
            {
                "name": item.get("name"),
                "quantity": item.get("quantity"),
                "price": item.get("price"),
            }
            for item in items
        ]
    )


async def create_order(
    session: Session,
    dispatcher: NotificationDispatcher | None,
    *,
    user_id: str,
    items: list[dict[str, Any]],
    total: Any,
    currency: str = "INR",
    address: str | None = None,
    city: str | None = None,
    state: str | None = None,
    postal_code: str | None = None,
    country: str | None = None,
    payment_id: str | None = None,
    payment_method: str | None = None,
) -> tuple[Order, dict[str, Any]]:
    """Store a new order in ``processing`` state and confirm it to the customer."""

    if not items:
        raise ValidationError("Missing required fields: userId, items, and total are required")
    if UserRepository(session).get(user_id) is None:
        raise ValidationError("Unknown user")

    order = OrderRepository(session).create(
        Order(
            id=None,
            user_id=user_id,
            status=ORDER_STATUS_PROCESSING,
            total=_coerce_total(total),
            currency=currency,
            items=list(items),
            address=address,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            payment_id=payment_id,
        )
    )

    notification = await notify_after_commit(
        dispatcher,
        NotificationRequest(
            type=TemplateType.ORDER_PLACED,
            user_id=order.user_id,
            title="Order Confirmation",
            body=f"Your order #{order.id} has been placed successfully.",
            data={
                "order_id": order.id,
                "order_total": f"{order.total:.2f}",
                "order_items": _summarize_items(order.items),
                "payment_method": payment_method or "",
            },
        ),
    )
    return order, notification
