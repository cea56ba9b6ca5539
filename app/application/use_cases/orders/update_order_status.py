"""Use case for changing the status of an order."""

from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_after_commit,
)
from app.domain.entities import NotificationRequest, Order, TemplateType
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import OrderRepository


async def update_order_status(
    session: Session,
    dispatcher: NotificationDispatcher | None,
    *,
    order_id: int,
    status: str | None,
    store_base_url: str = "",
) -> tuple[Order, dict[str, Any]]:
    """Persist the new ``status`` and notify the customer.

    The notification outcome is informational: the status change is committed
    before dispatching and stays committed whatever happens to the delivery.
    """

    normalized = (status or "").strip()
    if not normalized:
        raise ValidationError("Status is required")

    order = OrderRepository(session).update_status(order_id, normalized)
    if order is None:
        raise NotFoundError("Order not found")

    notification = await notify_after_commit(
        dispatcher,
        NotificationRequest(
            type=TemplateType.ORDER_STATUS,
            user_id=order.user_id,
            title=f"Order {normalized}",
            body=f"Your order #{order.id} has been {normalized}.",
            data={
                "order_id": order.id,
                "status": normalized,
                "url": f"{store_base_url.rstrip('/')}/orders/{order.id}",
            },
        ),
    )
    return order, notification
