"""Account Schemas — registration payload and account views.

Invariants:
    - AccountRegister carries profile fields only; role/isPremium in the body are ignored
    - Emails are stored lowercased, matching the email claim on identity tokens
"""

from datetime import datetime

from pydantic import Field, field_validator

from lessons_api.core.domain_types import Role
from lessons_api.schemas.base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class AccountRegister(CamelModel):
    """Registration — profile supplied by the client after identity-provider sign-up."""
    email: str = Field(min_length=3, max_length=320, pattern=EMAIL_PATTERN)
    name: str | None = Field(None, max_length=200)
    photo_url: str | None = Field(None, max_length=2048)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AccountResponse(CamelModel):
    email: str
    name: str | None = None
    photo_url: str | None = None
    role: Role
    is_premium: bool
    created_at: datetime


class RegistrationResponse(CamelModel):
    """created=False means the email was already registered (not an error)."""
    message: str
    created: bool
