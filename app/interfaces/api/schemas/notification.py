"""Schemas for notification dispatch endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.domain.entities import VariableValue


class NotificationSendRequest(BaseModel):
    """Payload accepted by the send-notification endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    data: dict[str, VariableValue] = Field(default_factory=dict)
    email: bool = True
    push: bool = True


class DeliveryLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient: str
    channel: str
    template_type: str
    success: bool
    provider_message_id: str | None
    error: str | None
    user_id: str | None
    created_at: datetime | None


class TemplatedEmailRequest(BaseModel):
    """Payload of the direct templated-email endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    to: EmailStr
    template_type: str = Field(..., alias="templateType", min_length=1)
    variables: dict[str, VariableValue] = Field(default_factory=dict)


class UserNotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    type: str
    data: dict[str, Any]
    is_read: bool
    created_at: datetime | None
    read_at: datetime | None
