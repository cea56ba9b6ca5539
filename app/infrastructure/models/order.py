"""SQLAlchemy model for storefront orders."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class OrderModel(Base):
    """Database representation of a customer order."""

    __tablename__ = "order"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    status = Column(String(30), nullable=False, default="processing")
    total = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    items = Column(JSON, nullable=False, default=list)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)
    payment_id = Column(String(100), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["OrderModel"]
