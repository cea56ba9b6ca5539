"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import ROLE_ADMIN, User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_admins(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.role == ROLE_ADMIN)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.email)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            password=user.password,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at or now_in_app_timezone(),
        )
        if user.id is not None:
            model.id = user.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password=model.password,
            first_name=model.first_name or "",
            last_name=model.last_name or "",
            role=model.role,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
