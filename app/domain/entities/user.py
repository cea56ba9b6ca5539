"""Domain entity representing a storefront user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"


@dataclass
class User:
    """Customer or administrator account."""

    id: str | None
    email: str
    password: str
    first_name: str
    last_name: str
    role: str = ROLE_CUSTOMER
    is_active: bool = True
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)


__all__ = ["ROLE_ADMIN", "ROLE_CUSTOMER", "User"]
