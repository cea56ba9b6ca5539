"""Domain entity representing one channel delivery attempt."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeliveryLog:
    """Append-only audit record of a single send attempt."""

    id: int | None
    recipient: str
    channel: str
    template_type: str
    success: bool
    provider_message_id: str | None = None
    error: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None


__all__ = ["DeliveryLog"]
