"""Domain entity representing a stored notification message template."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TemplateType(str, Enum):
    """Business events that can be notified."""

    ORDER_PLACED = "order_placed"
    REGISTRATION = "registration"
    ORDER_STATUS = "order_status"
    PASSWORD_RESET = "password_reset"
    CUSTOM = "custom"
    CUSTOMER_SIGNUPS = "customer_signups"
    STOCK_ALERT = "stock_alert"


class Channel(str, Enum):
    """Delivery transports supported by the dispatcher."""

    EMAIL = "email"
    PUSH = "push"


@dataclass
class MessageTemplate:
    """Message skeleton with ``{{placeholder}}`` tokens.

    ``subject`` holds the email subject for email templates and the
    notification title for push templates.
    """

    id: int | None
    name: str
    type: TemplateType
    channel: Channel
    subject: str
    body: str
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Channel", "MessageTemplate", "TemplateType"]
