"""Use case for creating user accounts."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_ADMIN, ROLE_CUSTOMER, User
from app.domain.errors import ValidationError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

from .validators import ensure_valid_email

MIN_PASSWORD_LENGTH = 8


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = ROLE_CUSTOMER,
) -> User:
    """Create a new user ensuring unique email addresses."""

    if role not in (ROLE_ADMIN, ROLE_CUSTOMER):
        raise ValidationError("Role not allowed")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    first_name = (first_name or "").strip()
    last_name = (last_name or "").strip()
    if not first_name or not last_name:
        raise ValidationError("Missing required fields")

    normalized_email = ensure_valid_email(email)
    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValidationError("Email address is already registered")

    user = User(
        id=None,
        email=normalized_email,
        password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    return repository.create(user)
