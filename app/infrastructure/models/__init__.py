"""ORM models used by the application infrastructure."""

from .delivery_log import DeliveryLogModel
from .device_token import DeviceTokenModel
from .message_template import MessageTemplateModel
from .order import OrderModel
from .user import UserModel
from .user_notification import UserNotificationModel

__all__ = [
    "DeliveryLogModel",
    "DeviceTokenModel",
    "MessageTemplateModel",
    "OrderModel",
    "UserModel",
    "UserNotificationModel",
]
