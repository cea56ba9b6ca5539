"""Error taxonomy shared by the storefront layers."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for errors raised by the application layers."""


class ValidationError(StorefrontError):
    """Raised when a request is missing fields or carries malformed values."""


class NotFoundError(StorefrontError):
    """Raised when a requested entity does not exist."""


class TemplateNotFoundError(NotFoundError):
    """Raised when no active message template matches a type and channel."""

    def __init__(self, template_type: str, channel: str) -> None:
        super().__init__(
            f"No active {channel} template found for type '{template_type}'"
        )
        self.template_type = template_type
        self.channel = channel


class TransportError(StorefrontError):
    """Raised by provider transports when a delivery attempt fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(StorefrontError):
    """Raised when provider credentials or settings are missing."""


__all__ = [
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "TemplateNotFoundError",
    "TransportError",
    "ConfigurationError",
]
