"""Pydantic schemas for the simulated checkout."""

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


CARD_NUMBER_LENGTH = 16
CVV_LENGTH = 3
EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")


class PaymentMethod(str, Enum):
    """Supported payment methods."""

    CARD = "card"
    BANK_TRANSFER = "bank_transfer"


class PaymentDetails(BaseModel):
    """Payment form data.

    Card fields are only required when paying by card.
    """

    method: PaymentMethod = PaymentMethod.CARD
    card_number: str | None = Field(None, description="16 digits, spaces allowed")
    expiry_date: str | None = Field(None, description="MM/YY")
    cvv: str | None = Field(None, description="3 digits")
    card_name: str | None = Field(None, description="Cardholder name")
    email: str = Field(..., description="Receipt email")

    @field_validator("card_number")
    @classmethod
    def normalize_card_number(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return re.sub(r"\s", "", v)

    @field_validator("card_name")
    @classmethod
    def strip_card_name(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            msg = "Please enter a valid email"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def check_card_fields(self) -> "PaymentDetails":
        if self.method != PaymentMethod.CARD:
            return self

        number = self.card_number or ""
        if len(number) != CARD_NUMBER_LENGTH or not number.isdigit():
            msg = "Please enter a valid card number"
            raise ValueError(msg)
        if not self.expiry_date or not EXPIRY_PATTERN.match(self.expiry_date):
            msg = "Please enter a valid expiry date"
            raise ValueError(msg)
        if not self.cvv or len(self.cvv) != CVV_LENGTH or not self.cvv.isdigit():
            msg = "Please enter a valid CVV"
            raise ValueError(msg)
        if not self.card_name:
            msg = "Please enter the cardholder name"
            raise ValueError(msg)
        return self

    @property
    def masked_card(self) -> str | None:
        if not self.card_number:
            return None
        return f"**** **** **** {self.card_number[-4:]}"


class Receipt(BaseModel):
    """Confirmation of a completed (simulated) purchase."""

    reference: str
    course_id: int
    course_title: str
    amount: int
    formatted_amount: str
    currency: str
    method: PaymentMethod
    card: str | None = None
    email: str
    paid_at: datetime
