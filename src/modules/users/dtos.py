"""User DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateUserDTO``: input for user registration.
- ``UpdateBalanceDTO``: input for the administrative balance update.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, StrictInt, field_validator


class CreateUserDTO(BaseModel):
    """Immutable DTO for user creation requests.

    ``email`` is validated by Pydantic ``EmailStr`` and lower-cased.
    New users start with a zero balance unless one is supplied.
    """

    model_config = ConfigDict(frozen=True)

    email: EmailStr
    balance: StrictInt = 0

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateBalanceDTO(BaseModel):
    """Administrative balance overwrite.  Negative values are allowed."""

    model_config = ConfigDict(frozen=True)

    balance: StrictInt
