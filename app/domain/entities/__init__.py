"""Domain entities exposed by the application."""

from .delivery_log import DeliveryLog
from .device_token import DeviceToken
from .message_template import Channel, MessageTemplate, TemplateType
from .notification import (
    DispatchResult,
    EmailResult,
    NotificationRequest,
    PushResult,
    VariableValue,
)
from .order import ORDER_STATUS_PROCESSING, Order
from .user import ROLE_ADMIN, ROLE_CUSTOMER, User
from .user_notification import UserNotification

__all__ = [
    "Channel",
    "DeliveryLog",
    "DeviceToken",
    "DispatchResult",
    "EmailResult",
    "MessageTemplate",
    "NotificationRequest",
    "ORDER_STATUS_PROCESSING",
    "Order",
    "PushResult",
    "ROLE_ADMIN",
    "ROLE_CUSTOMER",
    "TemplateType",
    "User",
    "UserNotification",
    "VariableValue",
]
