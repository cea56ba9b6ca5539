"""Aggregate application use cases."""

from .payments import verify_payment_signature
from .users import authenticate_user, create_user, register_customer

__all__ = [
    "authenticate_user",
    "create_user",
    "register_customer",
    "verify_payment_signature",
]
