"""Schemas for user payloads."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime | None


class RegisterResponse(BaseModel):
    success: bool
    user: UserRead
    notification: dict[str, Any]
