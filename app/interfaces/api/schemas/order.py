"""Schemas for order endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OrderItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    name: str | None = None
    quantity: int = Field(default=1, ge=1)
    price: float | None = None


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    items: list[OrderItem] = Field(..., min_length=1)
    total: Decimal = Field(..., gt=0)
    currency: str = "INR"
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None
    payment_id: str | None = Field(default=None, alias="paymentId")
    payment_method: str | None = Field(default=None, alias="paymentMethod")


class OrderStatusUpdate(BaseModel):
    status: str | None = None


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    status: str
    total: float
    currency: str
    items: list[dict[str, Any]]
    address: str | None
    city: str | None
    state: str | None
    postal_code: str | None
    country: str | None
    payment_id: str | None
    created_at: datetime | None
    updated_at: datetime | None


class OrderStatusResponse(BaseModel):
    success: bool
    order: OrderRead
    notification: dict[str, Any]


class OrderCreateResponse(BaseModel):
    success: bool
    order: OrderRead
    notification: dict[str, Any]
