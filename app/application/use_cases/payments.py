"""Use case for verifying Razorpay payment signatures."""

import hashlib
import hmac

from app.domain.errors import ValidationError


def verify_payment_signature(
    order_id: str, payment_id: str, signature: str, secret: str
) -> bool:
    """Return ``True`` when ``signature`` authenticates the order/payment pair.

    Razorpay signs ``"{order_id}|{payment_id}"`` with HMAC-SHA256 using the
    key secret.
    """

    if not (order_id and payment_id and signature):
        raise ValidationError("Missing required payment fields")

    expected = hmac.new(
        secret.encode("utf-8"),
        f"{order_id}|{payment_id}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return hmac.compare_digest(expected, signature)
