"""Repository implementations for infrastructure layer."""

from .delivery_log_repository import DeliveryLogRepository
from .device_token_repository import DeviceTokenRepository
from .message_template_repository import MessageTemplateRepository
from .order_repository import OrderRepository
from .user_notification_repository import UserNotificationRepository
from .user_repository import UserRepository

__all__ = [
    "DeliveryLogRepository",
    "DeviceTokenRepository",
    "MessageTemplateRepository",
    "OrderRepository",
    "UserNotificationRepository",
    "UserRepository",
]
