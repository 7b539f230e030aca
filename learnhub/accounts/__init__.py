"""Accounts module.

Provides:
- Registration and login with Argon2id password hashes
- The per-client session and its mirroring into the account list
- Enrollment, lesson completion and course progress
"""

from .models import SESSION_KEY, USERS_KEY, Account, Session
from .service import (
    AccountError,
    AccountStore,
    EmailTakenError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    LessonNotFoundError,
    NotAuthenticatedError,
)


__all__ = [
    "SESSION_KEY",
    "USERS_KEY",
    "Account",
    "AccountError",
    "AccountStore",
    "EmailTakenError",
    "InvalidAccountDataError",
    "InvalidCredentialsError",
    "LessonNotFoundError",
    "NotAuthenticatedError",
    "Session",
]
