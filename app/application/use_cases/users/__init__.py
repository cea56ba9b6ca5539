"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .register_customer import register_customer

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "register_customer",
]
