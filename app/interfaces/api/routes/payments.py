"""Endpoint for verifying Razorpay payment signatures."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.application.use_cases import verify_payment_signature
from app.config import Settings, get_settings
from app.domain.errors import ValidationError
from app.interfaces.api.schemas import (
    PaymentVerificationRequest,
    PaymentVerificationResponse,
)

router = APIRouter(prefix="/payments", tags=["payments"])
logger = logging.getLogger(__name__)


@router.post("/verify", response_model=PaymentVerificationResponse)
def verify_payment(
    payload: PaymentVerificationRequest,
    settings: Settings = Depends(get_settings),
):
    """Confirm that the payment callback was signed with our key secret."""

    if not settings.razorpay_key_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment verification is not configured",
        )

    try:
        verified = verify_payment_signature(
            payload.razorpay_order_id,
            payload.razorpay_payment_id,
            payload.razorpay_signature,
            settings.razorpay_key_secret,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not verified:
        logger.warning(
            "Invalid payment signature for order %s", payload.razorpay_order_id
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=PaymentVerificationResponse(
                verified=False, error="Invalid signature"
            ).model_dump(),
        )
    return PaymentVerificationResponse(verified=True)
