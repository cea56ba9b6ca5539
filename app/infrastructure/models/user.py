"""SQLAlchemy model for the user table."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


def _new_user_id() -> str:
    return str(uuid4())


class UserModel(Base):
    """Database representation of customers and administrators."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False, default="")
    last_name = Column(String(50), nullable=False, default="")
    role = Column(String(20), nullable=False, default="customer", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["UserModel"]
