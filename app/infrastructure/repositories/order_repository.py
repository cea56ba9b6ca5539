"""Persistence layer for orders."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import Order
from app.infrastructure.models import OrderModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class OrderRepository:
    """Provide CRUD operations for :class:`Order` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, order_id: int) -> Order | None:
        model = self.session.get(OrderModel, order_id)
        return self._to_entity(model) if model else None

    def create(self, order: Order) -> Order:
        model = OrderModel(
            user_id=order.user_id,
            status=order.status,
            total=order.total,
            currency=order.currency,
            items=list(order.items),
            address=order.address,
            city=order.city,
            state=order.state,
            postal_code=order.postal_code,
            country=order.country,
            payment_id=order.payment_id,
            created_at=order.created_at or now_in_app_timezone(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, order_id: int, status: str) -> Order | None:
        """Persist ``status`` and return the updated order, or ``None``."""

        model = self.session.get(OrderModel, order_id)
        if model is None:
            return None
        model.status = status
        model.updated_at = now_in_app_timezone()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            total=Decimal(model.total),
            currency=model.currency,
            items=list(model.items or []),
            address=model.address,
            city=model.city,
            state=model.state,
            postal_code=model.postal_code,
            country=model.country,
            payment_id=model.payment_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["OrderRepository"]
