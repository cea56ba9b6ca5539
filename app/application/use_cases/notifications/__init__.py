"""Notification dispatch: template resolution, substitution and delivery."""

from .direct_email import send_templated_email
from .dispatcher import (
    ERROR_NO_RECIPIENT,
    ERROR_SUPPRESSED,
    ERROR_TEMPLATE_LOOKUP_FAILED,
    ERROR_TEMPLATE_MISSING,
    NotificationDispatcher,
)
from .inbox import list_user_notifications, mark_user_notification_read
from .senders import (
    ERROR_NO_TOKENS,
    ERROR_TIMEOUT,
    ERROR_TOKEN_LOOKUP_FAILED,
    EmailSender,
    PushSender,
)
from .substitution import substitute
from .templates import coerce_channel, coerce_template_type, resolve_template
from .triggers import (
    ERROR_DISPATCH_FAILED,
    ERROR_NOTIFICATIONS_UNAVAILABLE,
    notify_admins,
    notify_after_commit,
)

__all__ = [
    "ERROR_DISPATCH_FAILED",
    "ERROR_NOTIFICATIONS_UNAVAILABLE",
    "ERROR_NO_RECIPIENT",
    "ERROR_NO_TOKENS",
    "ERROR_SUPPRESSED",
    "ERROR_TEMPLATE_LOOKUP_FAILED",
    "ERROR_TEMPLATE_MISSING",
    "ERROR_TIMEOUT",
    "ERROR_TOKEN_LOOKUP_FAILED",
    "EmailSender",
    "NotificationDispatcher",
    "PushSender",
    "coerce_channel",
    "coerce_template_type",
    "list_user_notifications",
    "mark_user_notification_read",
    "notify_admins",
    "notify_after_commit",
    "resolve_template",
    "send_templated_email",
    "substitute",
]
