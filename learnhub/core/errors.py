"""Mapping of domain error codes to HTTP responses."""

from typing import Protocol

from fastapi import HTTPException, status


class CodedError(Protocol):
    message: str
    code: str


STATUS_BY_CODE = {
    "email_taken": status.HTTP_409_CONFLICT,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "not_authenticated": status.HTTP_401_UNAUTHORIZED,
    "invalid_account_data": 422,
    "lesson_not_found": status.HTTP_404_NOT_FOUND,
    "course_not_found": status.HTTP_404_NOT_FOUND,
    "quiz_not_found": status.HTTP_404_NOT_FOUND,
    "already_enrolled": status.HTTP_409_CONFLICT,
    "payment_declined": status.HTTP_402_PAYMENT_REQUIRED,
}


def to_http_exception(error: CodedError) -> HTTPException:
    """Convert a domain error into an HTTPException.

    Errors carrying a ``field`` attribute get a structured detail so that
    forms can highlight the offending input.
    """
    field = getattr(error, "field", None)
    detail: str | dict[str, str] = (
        {"message": error.message, "field": field} if field else error.message
    )
    return HTTPException(
        status_code=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=detail,
    )
