"""Value objects exchanged by the notification dispatch path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .message_template import TemplateType

VariableValue = Union[str, int, float, bool, None]


@dataclass
class NotificationRequest:
    """Ephemeral description of one notification to deliver.

    ``title``/``body`` are exposed to templates as ``{{title}}``/``{{body}}``
    and ``data`` is merged into the variables and forwarded as push payload.
    """

    type: TemplateType
    user_id: str | None = None
    email: str | None = None
    variables: dict[str, VariableValue] = field(default_factory=dict)
    title: str | None = None
    body: str | None = None
    data: dict[str, VariableValue] = field(default_factory=dict)
    send_email: bool = True
    send_push: bool = True

    def template_variables(self) -> dict[str, VariableValue]:
        """Return the variable bag used for substitution."""

        merged: dict[str, VariableValue] = {}
        if self.title is not None:
            merged["title"] = self.title
        if self.body is not None:
            merged["body"] = self.body
        merged.update(self.data)
        merged.update(self.variables)
        return merged


@dataclass
class EmailResult:
    """Outcome of a single email send."""

    success: bool
    recipient: str | None = None
    message_id: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "recipient": self.recipient,
            "messageId": self.message_id,
            "error": self.error,
        }


@dataclass
class PushResult:
    """Outcome of a push fan-out to every device of one user."""

    success: bool
    sent_count: int = 0
    failed_tokens: list[str] = field(default_factory=list)
    error: str | None = None
    message_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "sentCount": self.sent_count,
            "failedTokens": [f"{token[:10]}..." for token in self.failed_tokens],
            "error": self.error,
        }


@dataclass
class DispatchResult:
    """Aggregate outcome of a dispatch; successful if any channel succeeded."""

    success: bool
    email_result: EmailResult | None = None
    push_result: PushResult | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.email_result is not None:
            payload["emailResult"] = self.email_result.to_dict()
        if self.push_result is not None:
            payload["pushResult"] = self.push_result.to_dict()
        return payload


__all__ = [
    "DispatchResult",
    "EmailResult",
    "NotificationRequest",
    "PushResult",
    "VariableValue",
]
