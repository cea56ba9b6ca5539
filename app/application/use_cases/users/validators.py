"""Common validation helpers for user use cases."""

from app.domain.errors import ValidationError


def ensure_valid_email(email: str) -> str:
    """Return a normalized email address or raise ``ValidationError``."""

    normalized = (email or "").strip()
    if normalized.count("@") != 1:
        raise ValidationError("Invalid email address")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain or domain.startswith("."):
        raise ValidationError("Invalid email address")

    return f"{local_part}@{domain.lower()}"
