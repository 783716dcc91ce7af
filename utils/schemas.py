"""
Pydantic request schemas for the auth and todo endpoints.
"""

from __future__ import annotations

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from auth.password import MAX_PASSWORD_BYTES
from database.models import Location


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class CredentialsRequest(BaseModel):
    """Body of both ``/auth/register`` and ``/auth/login``."""

    email: StrictStr
    password: StrictStr = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"Invalid email: {exc}") from exc
        # the normalized form is discarded: lookups stay exact and case-sensitive
        return value

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TodoCreateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel)

    title: StrictStr = Field(..., min_length=1)
    completed: StrictBool = False
    location: Optional[Location] = None
    photo_uri: Optional[StrictStr] = None
