"""Domain entity representing an in-app notification kept for a user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class UserNotification:
    """Inbox copy of a push notification, readable from the storefront."""

    id: int | None
    user_id: str
    title: str
    body: str
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = ["UserNotification"]
