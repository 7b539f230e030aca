"""Simulated course checkout."""

from .schemas import PaymentDetails, PaymentMethod, Receipt
from .service import (
    AlreadyEnrolledError,
    CheckoutError,
    CheckoutService,
    CourseNotFoundError,
    PaymentDeclinedError,
)


__all__ = [
    "AlreadyEnrolledError",
    "CheckoutError",
    "CheckoutService",
    "CourseNotFoundError",
    "PaymentDeclinedError",
    "PaymentDetails",
    "PaymentMethod",
    "Receipt",
]
