"""Notification hooks invoked after a state change has been committed."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import anyio

from app.domain.entities import NotificationRequest, TemplateType, User, VariableValue

from .dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

ERROR_NOTIFICATIONS_UNAVAILABLE = "notifications_unavailable"
ERROR_DISPATCH_FAILED = "dispatch_failed"


async def notify_after_commit(
    dispatcher: NotificationDispatcher | None,
    request: NotificationRequest,
) -> dict[str, Any]:
    """Dispatch ``request`` and return its outcome as informational data.

    The state change that triggered the notification is already persisted, so
    nothing raised here may reach the caller.
    """

    event = getattr(request.type, "value", request.type)
    if dispatcher is None:
        logger.warning(
            "Skipping %s notification for user %s: notification subsystem unavailable",
            event,
            request.user_id,
        )
        return {"success": False, "error": ERROR_NOTIFICATIONS_UNAVAILABLE}

    try:
        result = await dispatcher.dispatch(request)
    except Exception:
        logger.exception(
            "Notification dispatch failed for %s (user %s)", event, request.user_id
        )
        return {"success": False, "error": ERROR_DISPATCH_FAILED}

    if not result.success:
        logger.warning(
            "No channel delivered the %s notification for user %s",
            event,
            request.user_id,
        )
    return result.to_dict()


async def notify_admins(
    dispatcher: NotificationDispatcher | None,
    admins: Sequence[User],
    *,
    template_type: TemplateType,
    variables: Mapping[str, VariableValue],
    max_concurrency: int,
) -> list[dict[str, Any]]:
    """Notify every administrator, at most ``max_concurrency`` at a time.

    Results keep the order of ``admins``; a failure for one recipient is
    captured in its own entry and does not stop the others.
    """

    results: list[dict[str, Any]] = [{} for _ in admins]
    limiter = anyio.CapacityLimiter(max_concurrency)

    async def _notify(index: int, admin: User) -> None:
        async with limiter:
            outcome = await notify_after_commit(
                dispatcher,
                NotificationRequest(
                    type=template_type,
                    user_id=admin.id,
                    email=admin.email,
                    variables=dict(variables),
                ),
            )
        results[index] = {"recipient": admin.email, **outcome}

    async with anyio.create_task_group() as task_group:
        for index, admin in enumerate(admins):
            task_group.start_soon(_notify, index, admin)

    delivered = sum(1 for result in results if result.get("success"))
    logger.info(
        "Admin %s notifications delivered to %s/%s",
        template_type.value,
        delivered,
        len(admins),
    )
    return results


__all__ = [
    "ERROR_DISPATCH_FAILED",
    "ERROR_NOTIFICATIONS_UNAVAILABLE",
    "notify_admins",
    "notify_after_commit",
]
