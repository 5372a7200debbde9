"""Pydantic models for support tickets."""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.models.support import TICKET_CATEGORIES, TICKET_PRIORITIES
from app.schemas.common import UTCDatetime


class TicketMeta(BaseModel):
    """Client context attached to a ticket; non-string values are dropped."""

    page: Optional[str] = None
    user_agent: Optional[str] = None
    app_version: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("page", "user_agent", "app_version", mode="before")
    @classmethod
    def strings_only(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class TicketCreate(BaseModel):
    subject: str
    message: str
    category: str = "general"
    priority: str = "medium"
    meta: TicketMeta = Field(default_factory=TicketMeta)

    @field_validator("subject")
    @classmethod
    def subject_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Subject is too short")
        return value

    @field_validator("message")
    @classmethod
    def message_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("Message is too short")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def known_category(cls, value: Any) -> str:
        return value if value in TICKET_CATEGORIES else "general"

    @field_validator("priority", mode="before")
    @classmethod
    def known_priority(cls, value: Any) -> str:
        return value if value in TICKET_PRIORITIES else "medium"

    @field_validator("meta", mode="before")
    @classmethod
    def meta_object(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class TicketRead(BaseModel):
    id: uuid.UUID
    user_id: str
    subject: str
    message: str
    category: str
    priority: str
    status: str
    meta: Dict[str, Any] = Field(default_factory=dict)
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class TicketResponse(BaseModel):
    ticket: TicketRead


class TicketListResponse(BaseModel):
    tickets: List[TicketRead] = Field(default_factory=list)
