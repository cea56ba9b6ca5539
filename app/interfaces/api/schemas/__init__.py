from .auth import RegisterRequest, Token
from .device_token import DeviceTokenStatus, DeviceTokenSummary
from .message_template import (
    EmailTemplateCreate,
    MessageTemplateRead,
    MessageTemplateUpdate,
    PushTemplateCreate,
    TemplateChannelStatus,
)
from .notification import (
    DeliveryLogRead,
    NotificationSendRequest,
    TemplatedEmailRequest,
    UserNotificationRead,
)
from .order import (
    OrderCreate,
    OrderCreateResponse,
    OrderItem,
    OrderRead,
    OrderStatusResponse,
    OrderStatusUpdate,
)
from .payment import PaymentVerificationRequest, PaymentVerificationResponse
from .user import RegisterResponse, UserRead
