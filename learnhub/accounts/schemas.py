"""Pydantic schemas for the account endpoints."""

from pydantic import BaseModel, Field, field_validator, model_validator

from learnhub.config import get_settings


def _check_email(v: str) -> str:
    if "@" not in v:
        msg = "Please enter a valid email"
        raise ValueError(msg)
    return v


def _check_password_length(v: str) -> str:
    min_length = get_settings().password_min_length
    if len(v) < min_length:
        msg = f"Password must be at least {min_length} characters"
        raise ValueError(msg)
    return v


# ==============================================================================
# Request Schemas
# ==============================================================================


class RegisterRequest(BaseModel):
    """Account registration request."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., min_length=3, max_length=254, description="Email address")
    password: str = Field(..., description="Password")
    confirm_password: str | None = Field(None, description="Password confirmation")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Please enter your name"
            raise ValueError(msg)
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_length(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            msg = "Password confirmation does not match"
            raise ValueError(msg)
        return self


class LoginRequest(BaseModel):
    """Login request."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class UpdateProfileRequest(BaseModel):
    """Profile update request; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, min_length=3, max_length=254)
    avatar: str | None = Field(None, description="Avatar URL or data URI")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _check_email(v)


class ChangePasswordRequest(BaseModel):
    """Password change request."""

    current_password: str = Field(..., min_length=1)
    new_password: str
    confirm_password: str | None = None

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return _check_password_length(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if (
            self.confirm_password is not None
            and self.confirm_password != self.new_password
        ):
            msg = "Password confirmation does not match"
            raise ValueError(msg)
        return self


# ==============================================================================
# Response Schemas
# ==============================================================================


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
