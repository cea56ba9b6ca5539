"""FastAPI dependency utilities."""

from hashlib import sha256

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    EmailSender,
    NotificationDispatcher,
    PushSender,
)
from app.config import Settings, get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import (
    DeliveryLogRepository,
    DeviceTokenRepository,
    MessageTemplateRepository,
    UserNotificationRepository,
    UserRepository,
)
from app.infrastructure.security import decode_access_token
from app.infrastructure.transports import NotificationTransports

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def password_signature(user: User) -> str:
    """Fingerprint that invalidates issued tokens when credentials change."""

    return sha256(f"{user.password}:{int(user.is_active)}".encode()).hexdigest()


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None or signature_claim != password_signature(user):
        raise _credentials_error()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def get_notification_transports(request: Request) -> NotificationTransports:
    """Return the provider transports created when the application started."""

    transports = getattr(request.app.state, "notification_transports", None)
    if transports is None:
        return NotificationTransports(
            email=None, push=None, error="Notification transports not initialized"
        )
    return transports


def get_dispatcher(
    db: Session = Depends(get_db),
    transports: NotificationTransports = Depends(get_notification_transports),
    settings: Settings = Depends(get_settings),
) -> NotificationDispatcher | None:
    """Build a dispatcher bound to the request session, or ``None`` if unavailable."""

    if not transports.available:
        return None

    return NotificationDispatcher(
        templates=MessageTemplateRepository(db),
        logs=DeliveryLogRepository(db),
        users=UserRepository(db),
        email_sender=EmailSender(
            transports.email, timeout=settings.notification_timeout_seconds
        ),
        push_sender=PushSender(
            transports.push,
            DeviceTokenRepository(db),
            timeout=settings.notification_timeout_seconds,
            prune_invalid_tokens=settings.push_prune_invalid_tokens,
        ),
        suppress_after_no_token_failures=settings.push_suppress_after_no_token_failures,
        inbox=UserNotificationRepository(db),
    )


def get_email_sender(
    transports: NotificationTransports = Depends(get_notification_transports),
    settings: Settings = Depends(get_settings),
) -> EmailSender | None:
    """Return a sender over the SendGrid transport, or ``None`` if it is not configured."""

    if not transports.available or transports.email is None:
        return None
    return EmailSender(transports.email, timeout=settings.notification_timeout_seconds)
