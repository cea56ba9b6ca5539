"""SQLAlchemy model for notification delivery attempts."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class DeliveryLogModel(Base):
    """Append-only record of one channel send attempt."""

    __tablename__ = "delivery_log"

    id = Column(Integer, primary_key=True, index=True)
    recipient = Column(String(255), nullable=False, index=True)
    channel = Column(String(10), nullable=False)
    template_type = Column(String(50), nullable=False)
    success = Column(Boolean, nullable=False)
    provider_message_id = Column(String(255), nullable=True)
    error = Column(Text, nullable=True)
    user_id = Column(String(36), nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["DeliveryLogModel"]
