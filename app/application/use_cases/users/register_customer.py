"""Use case for customer self-registration."""

from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_admins,
    notify_after_commit,
)
from app.domain.entities import ROLE_CUSTOMER, NotificationRequest, TemplateType, User
from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_timezone

from .create_user import create_user


async def register_customer(
    session: Session,
    dispatcher: NotificationDispatcher | None,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    admin_concurrency: int = 5,
) -> tuple[User, dict[str, Any]]:
    """Create a customer account, welcome them and tell the administrators.

    Returns the new user and a mapping with the ``welcome`` outcome and one
    ``admins`` entry per notified administrator.
    """

    user = create_user(
        session,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=ROLE_CUSTOMER,
    )

    welcome = await notify_after_commit(
        dispatcher,
        NotificationRequest(
            type=TemplateType.REGISTRATION,
            user_id=user.id,
            email=user.email,
            send_push=False,
        ),
    )

    registered_at = user.created_at or now_in_app_timezone()
    admins = await notify_admins(
        dispatcher,
        UserRepository(session).list_admins(),
        template_type=TemplateType.CUSTOMER_SIGNUPS,
        variables={
            "customer_name": user.full_name,
            "customer_email": user.email,
            "registration_date": registered_at.strftime("%d/%m/%Y"),
        },
        max_concurrency=admin_concurrency,
    )
    return user, {"welcome": welcome, "admins": admins}
