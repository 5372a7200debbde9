"""Pydantic models for the profile mirror."""
from __future__ import annotations

from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, model_validator

from app.schemas.common import UTCDatetime


class UserRead(BaseModel):
    """Profile row as returned to the owner."""

    id: str
    email: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: str
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Schema for partial updates to the current user profile."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=80)
    image_url: Optional[AnyHttpUrl] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "UserUpdate":
        if not any(value is not None for value in self.model_dump().values()):
            raise ValueError("At least one field must be provided")
        return self


class AccountDeactivated(BaseModel):
    success: bool = True
