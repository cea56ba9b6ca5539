"""Endpoints for customer registration and token issuance."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_customer,
)
from app.config import Settings, get_settings
from app.domain.errors import ValidationError
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token
from app.interfaces.api.dependencies import get_dispatcher, password_signature
from app.interfaces.api.schemas import (
    RegisterRequest,
    RegisterResponse,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Authenticate the user by email and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role,
            "pwd_sig": password_signature(user),
        },
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    return {"access_token": access_token, "token_type": "bearer", "role": user.role}


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher | None = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> RegisterResponse:
    """Create a customer account and send the welcome and admin notifications."""

    try:
        user, notification = await register_customer(
            db,
            dispatcher,
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
            admin_concurrency=settings.admin_notification_concurrency,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Registered customer %s", user.email)
    return RegisterResponse(
        success=True, user=UserRead.model_validate(user), notification=notification
    )
