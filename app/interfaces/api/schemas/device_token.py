"""Schemas for the device token diagnostics endpoint."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from .notification import DeliveryLogRead


class DeviceTokenSummary(BaseModel):
    token: str
    device_info: dict[str, Any]
    created_at: datetime | None


class DeviceTokenStatus(BaseModel):
    user_id: str
    push_enabled: bool
    tokens_count: int
    tokens: list[DeviceTokenSummary]
    recent_logs: list[DeliveryLogRead]
