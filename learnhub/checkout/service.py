"""Simulated checkout.

No gateway is contacted: a purchase waits for the configured processing
delay, applies a couple of deterministic decline rules, then enrolls the
session in the course.
"""

import asyncio
import secrets
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from learnhub.accounts.service import NotAuthenticatedError
from learnhub.catalog import format_price
from learnhub.core.logging import get_logger

from .schemas import PaymentDetails, PaymentMethod, Receipt


if TYPE_CHECKING:
    from learnhub.accounts.service import AccountStore
    from learnhub.catalog import Catalog


logger = get_logger(__name__)

# Test card that is always declined
DECLINED_TEST_CARDS = frozenset({"4000000000000002"})


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class CheckoutError(Exception):
    """Base checkout error."""

    def __init__(self, message: str, code: str = "checkout_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CourseNotFoundError(CheckoutError):
    """Course is not in the catalog."""

    def __init__(self, message: str = "Course not found"):
        super().__init__(message, "course_not_found")


class AlreadyEnrolledError(CheckoutError):
    """Session is already enrolled in the course."""

    def __init__(self, message: str = "Already enrolled in this course"):
        super().__init__(message, "already_enrolled")


class PaymentDeclinedError(CheckoutError):
    """Simulated payment was refused."""

    def __init__(self, message: str = "Payment declined"):
        super().__init__(message, "payment_declined")


# ==============================================================================
# Checkout Service
# ==============================================================================


def card_expired(expiry_date: str, now: datetime) -> bool:
    """True when an ``MM/YY`` expiry lies before the current month."""
    month, year = (int(part) for part in expiry_date.split("/"))
    return (2000 + year, month) < (now.year, now.month)


class CheckoutService:
    """Sells catalog courses to the session of an AccountStore."""

    def __init__(
        self,
        account_store: "AccountStore",
        catalog: "Catalog",
        processing_delay: float = 0.0,
        currency: str = "VND",
    ):
        self.account_store = account_store
        self.catalog = catalog
        self.processing_delay = processing_delay
        self.currency = currency

    async def purchase(self, course_id: int, payment: PaymentDetails) -> Receipt:
        """Pay for a course and enroll the current session in it.

        Raises:
            NotAuthenticatedError: Without an active session
            CourseNotFoundError: If the course is not in the catalog
            AlreadyEnrolledError: If the session is already enrolled
            PaymentDeclinedError: If the card is expired or a decline test card
        """
        session = self.account_store.refresh()
        if session is None:
            raise NotAuthenticatedError

        course = self.catalog.find_course_by_id(course_id)
        if course is None:
            raise CourseNotFoundError

        if self.account_store.is_enrolled(course_id):
            raise AlreadyEnrolledError

        if self.processing_delay > 0:
            await asyncio.sleep(self.processing_delay)

        now = datetime.now(UTC)
        if payment.method == PaymentMethod.CARD:
            if payment.card_number in DECLINED_TEST_CARDS:
                logger.info("payment_declined", course_id=course_id, reason="test_card")
                raise PaymentDeclinedError
            if payment.expiry_date and card_expired(payment.expiry_date, now):
                logger.info("payment_declined", course_id=course_id, reason="expired")
                raise PaymentDeclinedError("Card expired")

        # Another purchase may have finished while this one was processing
        self.account_store.refresh()
        if self.account_store.is_enrolled(course_id):
            logger.info("purchase_superseded", course_id=course_id)
            raise AlreadyEnrolledError

        self.account_store.enroll_course(course_id)

        receipt = Receipt(
            reference=f"LH-{secrets.token_hex(6).upper()}",
            course_id=course.id,
            course_title=course.title,
            amount=course.price,
            formatted_amount=format_price(course.price, self.currency),
            currency=self.currency,
            method=payment.method,
            card=payment.masked_card,
            email=payment.email,
            paid_at=now,
        )
        logger.info(
            "course_purchased",
            user_id=session.id,
            course_id=course_id,
            amount=course.price,
            reference=receipt.reference,
        )
        return receipt
