"""SQLAlchemy model for notification message templates."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class MessageTemplateModel(Base):
    """Database representation of an email or push template."""

    __tablename__ = "message_template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    type = Column(String(50), nullable=False, index=True)
    channel = Column(String(10), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["MessageTemplateModel"]
