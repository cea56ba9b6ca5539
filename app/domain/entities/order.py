"""Domain entity representing a storefront order."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

ORDER_STATUS_PROCESSING = "processing"


@dataclass
class Order:
    """Order placed by a customer."""

    id: int | None
    user_id: str
    status: str
    total: Decimal
    currency: str = "INR"
    items: list[dict[str, Any]] = field(default_factory=list)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    payment_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["ORDER_STATUS_PROCESSING", "Order"]
