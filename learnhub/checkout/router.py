"""Checkout API endpoints."""

from fastapi import APIRouter, Depends, status

from learnhub.accounts.dependencies import (
    AccountStoreDep,
    CatalogDep,
    SettingsDep,
    get_current_user,
)
from learnhub.accounts.service import NotAuthenticatedError
from learnhub.core.errors import to_http_exception

from .schemas import PaymentDetails, Receipt
from .service import CheckoutError, CheckoutService


router = APIRouter(
    prefix="/v1/checkout",
    tags=["checkout"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "/{course_id}",
    response_model=Receipt,
    status_code=status.HTTP_201_CREATED,
    summary="Buy a course",
    responses={
        402: {"description": "Payment declined"},
        404: {"description": "Course not found"},
        409: {"description": "Already enrolled"},
    },
)
async def purchase_course(
    course_id: int,
    payment: PaymentDetails,
    store: AccountStoreDep,
    catalog: CatalogDep,
    settings: SettingsDep,
) -> Receipt:
    """Pay for a course (simulated) and enroll in it."""
    checkout = CheckoutService(
        account_store=store,
        catalog=catalog,
        processing_delay=settings.checkout_processing_delay_seconds,
        currency=settings.currency,
    )
    try:
        return await checkout.purchase(course_id, payment)
    except (CheckoutError, NotAuthenticatedError) as e:
        raise to_http_exception(e) from e
