"""Domain entity representing a push-capable client registration."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class DeviceToken:
    """Messaging token registered by one of the user's devices."""

    id: int | None
    user_id: str
    token: str
    device_info: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def masked(self) -> str:
        """Return a shortened token suitable for logs and API responses."""

        return f"{self.token[:10]}..."


__all__ = ["DeviceToken"]
