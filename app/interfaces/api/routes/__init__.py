from fastapi import FastAPI

from .auth import router as auth_router
from .device_tokens import router as device_tokens_router
from .message_templates import router as message_templates_router
from .notifications import router as notifications_router
from .orders import router as orders_router
from .payments import router as payments_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(orders_router)
    app.include_router(message_templates_router)
    app.include_router(device_tokens_router)
    app.include_router(payments_router)
