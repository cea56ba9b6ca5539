"""SQLAlchemy model for push device tokens."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class DeviceTokenModel(Base):
    """Messaging token registered by a client device."""

    __tablename__ = "device_token"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token = Column(Text, nullable=False)
    device_info = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["DeviceTokenModel"]
