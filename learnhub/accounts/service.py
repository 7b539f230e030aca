"""Account store service layer.

Business logic for:
- Registration and login against the stored account list
- The active session and its mirroring into the account list
- Profile updates and password changes
- Enrollment, lesson completion and derived progress
"""

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from learnhub.core.logging import get_logger
from learnhub.progress import DashboardStats, calculate_progress, summarize_progress

from .models import (
    SESSION_KEY,
    USERS_KEY,
    Account,
    Session,
    accounts_adapter,
    dump_accounts,
    generate_account_id,
    merge,
)
from .security import burn_verification, hash_password, verify_password


if TYPE_CHECKING:
    from learnhub.catalog import Catalog, Course, Lesson
    from learnhub.core.storage import KeyValueStorage


logger = get_logger(__name__)

DEFAULT_PASSWORD_MIN_LENGTH = 6


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class AccountError(Exception):
    """Base account error."""

    def __init__(self, message: str, code: str = "account_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class EmailTakenError(AccountError):
    """Another account already uses this email."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, "email_taken")


class InvalidCredentialsError(AccountError):
    """No account matches the email and password."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, "invalid_credentials")


class NotAuthenticatedError(AccountError):
    """Operation requires an active session."""

    def __init__(self, message: str = "Login required"):
        super().__init__(message, "not_authenticated")


class InvalidAccountDataError(AccountError):
    """Account fields are missing or malformed."""

    def __init__(self, message: str = "Invalid account data", field: str | None = None):
        super().__init__(message, "invalid_account_data")
        self.field = field


class LessonNotFoundError(AccountError):
    """Course or lesson is not part of the catalog."""

    def __init__(self, message: str = "Lesson not found"):
        super().__init__(message, "lesson_not_found")


# ==============================================================================
# Account Store
# ==============================================================================


class AccountStore:
    """Owns stored accounts and the session of one client.

    Accounts are kept under the ``users`` key of ``storage``; the session is
    kept under ``currentUser`` of ``session_storage`` (same storage unless a
    per-client scope is given). Each instance holds its own session, so
    several isolated sessions can share one account list.
    """

    def __init__(
        self,
        storage: "KeyValueStorage",
        catalog: "Catalog",
        session_storage: "KeyValueStorage | None" = None,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self.storage = storage
        self.session_storage = session_storage if session_storage is not None else storage
        self.catalog = catalog
        self.password_min_length = password_min_length
        self._session = self._load_session()

    # ==========================================================================
    # Persistence
    # ==========================================================================

    def _load_accounts(self) -> list[Account]:
        raw = self.storage.get(USERS_KEY)
        if not raw:
            return []
        try:
            return accounts_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("stored_accounts_unreadable", error_count=e.error_count())
            return []

    def _save_accounts(self, accounts: list[Account]) -> None:
        self.storage.set(USERS_KEY, dump_accounts(accounts))

    def _load_session(self) -> Session | None:
        raw = self.session_storage.get(SESSION_KEY)
        if not raw:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("stored_session_unreadable", error_count=e.error_count())
            return None

    def _save_session(self, session: Session | None) -> None:
        self._session = session
        if session is None:
            self.session_storage.remove(SESSION_KEY)
        else:
            self.session_storage.set(SESSION_KEY, session.to_json())

    def _require_session(self) -> Session:
        if self._session is None:
            raise NotAuthenticatedError
        return self._session

    def refresh(self) -> Session | None:
        """Re-read the session from storage.

        Enrollments and completions recorded on the stored account since the
        session was loaded (by another request of the same client, or another
        client logged into the same account) are folded in.
        """
        session = self._load_session()
        if session is not None:
            account = next(
                (a for a in self._load_accounts() if a.id == session.id), None
            )
            if account is not None:
                completed = {
                    course_id: list(lessons)
                    for course_id, lessons in account.completed_lessons.items()
                }
                for course_id, lessons in session.completed_lessons.items():
                    completed[course_id] = [*completed.get(course_id, []), *lessons]
                session = merge(
                    session,
                    {
                        "enrolled_courses": [
                            *account.enrolled_courses,
                            *session.enrolled_courses,
                        ],
                        "completed_lessons": completed,
                    },
                )
        self._session = session
        return session

    def _commit(self, updates: dict[str, Any]) -> Session:
        """Merge ``updates`` into the session and its account list entry."""
        session = merge(self._require_session(), updates)
        self._save_session(session)

        accounts = self._load_accounts()
        for index, account in enumerate(accounts):
            if account.id == session.id:
                accounts[index] = merge(account, updates)
                self._save_accounts(accounts)
                break
        else:
            logger.warning("session_account_missing", user_id=session.id)

        return session

    # ==========================================================================
    # Authentication
    # ==========================================================================

    @property
    def current_user(self) -> Session | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def accounts(self) -> list[Session]:
        """All stored accounts, without password material."""
        return [account.to_session() for account in self._load_accounts()]

    async def register(self, name: str, email: str, password: str) -> Session:
        """Create a new account. Does not log in.

        Raises:
            InvalidAccountDataError: If name, email or password is blank
            EmailTakenError: If an account already uses this exact email
        """
        name = (name or "").strip()
        if not name:
            raise InvalidAccountDataError("Name is required", field="name")
        if not email or not email.strip():
            raise InvalidAccountDataError("Email is required", field="email")
        if not password:
            raise InvalidAccountDataError("Password is required", field="password")

        accounts = self._load_accounts()
        if any(account.email == email for account in accounts):
            logger.info("registration_rejected", reason="email_taken")
            raise EmailTakenError

        account = Account(
            id=generate_account_id(),
            name=name,
            email=email,
            password_hash=hash_password(password),
        )
        accounts.append(account)
        self._save_accounts(accounts)

        logger.info("account_registered", user_id=account.id)
        return account.to_session()

    async def login(self, email: str, password: str) -> Session:
        """Start a session for the account matching email and password.

        Raises:
            InvalidCredentialsError: If no account matches
        """
        accounts = self._load_accounts()
        index, account = next(
            ((i, a) for i, a in enumerate(accounts) if a.email == email),
            (None, None),
        )
        if account is None:
            burn_verification(password or "")
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        is_valid, new_hash = verify_password(password or "", account.password_hash)
        if not is_valid:
            logger.info("login_failed", reason="wrong_password", user_id=account.id)
            raise InvalidCredentialsError

        # Update hash if needed (algorithm params changed)
        if new_hash:
            accounts[index] = merge(account, {"password_hash": new_hash})
            self._save_accounts(accounts)
            logger.info("password_rehashed", user_id=account.id)

        session = account.to_session()
        self._save_session(session)
        logger.info("login_succeeded", user_id=session.id)
        return session

    def logout(self) -> None:
        """End the session. Safe to call without one."""
        if self._session is not None:
            logger.info("logged_out", user_id=self._session.id)
        self._save_session(None)

    # ==========================================================================
    # Profile
    # ==========================================================================

    def update_profile(
        self,
        name: str | None = None,
        email: str | None = None,
        avatar: str | None = None,
    ) -> Session:
        """Update profile fields of the active session.

        Raises:
            NotAuthenticatedError: Without an active session
            InvalidAccountDataError: If name or email is blank
            EmailTakenError: If another account already uses the new email
        """
        session = self._require_session()
        updates: dict[str, Any] = {}

        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidAccountDataError("Name is required", field="name")
            updates["name"] = name

        if email is not None and email != session.email:
            if not email.strip():
                raise InvalidAccountDataError("Email is required", field="email")
            if any(
                account.email == email and account.id != session.id
                for account in self._load_accounts()
            ):
                raise EmailTakenError
            updates["email"] = email

        if avatar is not None:
            updates["avatar"] = avatar

        if not updates:
            return session

        logger.info("profile_updated", user_id=session.id, fields=sorted(updates))
        return self._commit(updates)

    def change_password(self, current_password: str, new_password: str) -> None:
        """Replace the password of the active session's account.

        Raises:
            NotAuthenticatedError: Without an active session
            InvalidCredentialsError: If the current password is wrong
            InvalidAccountDataError: If the new password is too short
        """
        session = self._require_session()
        accounts = self._load_accounts()
        index, account = next(
            ((i, a) for i, a in enumerate(accounts) if a.id == session.id),
            (None, None),
        )
        if account is None:
            raise NotAuthenticatedError

        is_valid, _ = verify_password(current_password or "", account.password_hash)
        if not is_valid:
            raise InvalidCredentialsError("Current password is incorrect")

        if len(new_password or "") < self.password_min_length:
            msg = f"Password must be at least {self.password_min_length} characters"
            raise InvalidAccountDataError(msg, field="new_password")

        accounts[index] = merge(account, {"password_hash": hash_password(new_password)})
        self._save_accounts(accounts)
        logger.info("password_changed", user_id=session.id)

    # ==========================================================================
    # Enrollment & Lessons
    # ==========================================================================

    def enroll_course(self, course_id: int) -> Session:
        """Add a course to the session's enrollments (no-op if present)."""
        self.refresh()
        session = self._require_session()
        if course_id in session.enrolled_courses:
            return session

        logger.info("course_enrolled", user_id=session.id, course_id=course_id)
        return self._commit({"enrolled_courses": [*session.enrolled_courses, course_id]})

    def complete_lesson(self, course_id: int, lesson_id: int) -> Session:
        """Mark a lesson complete (no-op if already complete).

        Raises:
            NotAuthenticatedError: Without an active session
            LessonNotFoundError: If the catalog has no such course or lesson
        """
        self.refresh()
        session = self._require_session()

        course = self.catalog.find_course_by_id(course_id)
        if course is None or course.find_lesson(lesson_id) is None:
            raise LessonNotFoundError

        completed = session.completed_in(course_id)
        if lesson_id in completed:
            return session

        completed_lessons = dict(session.completed_lessons)
        completed_lessons[course_id] = [*completed, lesson_id]

        logger.info(
            "lesson_completed",
            user_id=session.id,
            course_id=course_id,
            lesson_id=lesson_id,
        )
        return self._commit({"completed_lessons": completed_lessons})

    def is_enrolled(self, course_id: int) -> bool:
        return self._session is not None and course_id in self._session.enrolled_courses

    def is_lesson_completed(self, course_id: int, lesson_id: int) -> bool:
        if self._session is None:
            return False
        return lesson_id in self._session.completed_in(course_id)

    def get_progress(self, course_id: int) -> int:
        """Percentage (0-100) of the course's lessons completed."""
        if self._session is None:
            return 0
        course = self.catalog.find_course_by_id(course_id)
        if course is None:
            return 0
        return calculate_progress(
            len(self._session.completed_in(course_id)), course.total_lessons
        )

    def next_lesson(self, course_id: int) -> "Lesson | None":
        """First lesson of the course, in catalog order, not yet completed."""
        course = self.catalog.find_course_by_id(course_id)
        if course is None:
            return None
        return next(
            (
                lesson
                for lesson in course.lessons
                if not self.is_lesson_completed(course_id, lesson.id)
            ),
            None,
        )

    def enrolled_courses(self) -> list["Course"]:
        """Catalog courses the session is enrolled in, in catalog order."""
        return [course for course in self.catalog if self.is_enrolled(course.id)]

    def dashboard_stats(self) -> DashboardStats:
        return summarize_progress(
            self.get_progress(course.id) for course in self.enrolled_courses()
        )
