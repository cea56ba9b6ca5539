"""SQLAlchemy model for the in-app notification inbox."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class UserNotificationModel(Base):
    """Notification stored for later retrieval by its recipient."""

    __tablename__ = "user_notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    read_at = Column(DateTime(timezone=True), nullable=True)


__all__ = ["UserNotificationModel"]
