"""Schemas for message template endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import Channel, TemplateType


class EmailTemplateCreate(BaseModel):
    name: str
    type: str
    subject: str
    body: str
    is_active: bool = True


class PushTemplateCreate(BaseModel):
    name: str
    type: str
    title: str
    body: str
    is_active: bool = True


class MessageTemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    type: str | None = None
    subject: str | None = Field(default=None, description="Email subject or push title")
    body: str | None = None
    is_active: bool | None = None


class MessageTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: TemplateType
    channel: Channel
    subject: str
    body: str
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None


class TemplateChannelStatus(BaseModel):
    type: str
    channel: str
    active: bool
    duplicates: int
    template_id: int | None
    name: str | None
    body_preview: str | None
