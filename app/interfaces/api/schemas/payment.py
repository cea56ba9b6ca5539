"""Schemas for payment verification."""

from pydantic import BaseModel


class PaymentVerificationRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class PaymentVerificationResponse(BaseModel):
    verified: bool
    error: str | None = None
