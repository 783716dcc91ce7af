"""
Stored record types for users and todos.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_public(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Location(_Record):
    model_config = ConfigDict(allow_inf_nan=False)

    latitude: float
    longitude: float

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _numbers_only(cls, value: Any) -> Any:
        # finite JSON numbers only: no numeric strings, no booleans
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        return value


class UserRecord(_Record):
    id: str
    email: str
    password_hash: str = Field(..., exclude=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TodoRecord(_Record):
    id: str
    user_id: str
    title: str
    completed: bool = False
    location: Optional[Location] = None
    photo_uri: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
