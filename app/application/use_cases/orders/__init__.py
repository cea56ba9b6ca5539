"""Use cases for storefront orders."""

from .create_order import create_order
from .update_order_status import update_order_status

__all__ = ["create_order", "update_order_status"]
