"""Pydantic models for the settings page."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.db.models.analysis import ANALYSIS_SOURCES
from app.schemas.user import UserSummary


def normalize_default_source(value: Any) -> str:
    return value if value in ANALYSIS_SOURCES else "manual"


class NotificationPrefs(BaseModel):
    email_product_insights: bool = True
    email_weekly_digest: bool = False
    email_security_alerts: bool = True
    default_source: str = "manual"
    auto_save_analyses: bool = True

    model_config = ConfigDict(from_attributes=True)

    @field_validator("default_source", mode="before")
    @classmethod
    def coerce_default_source(cls, value: Any) -> str:
        return normalize_default_source(value)


class NotificationPrefsUpdate(BaseModel):
    """Partial update; omitted fields fall back to the defaults, not the stored values."""

    email_product_insights: Optional[bool] = None
    email_weekly_digest: Optional[bool] = None
    email_security_alerts: Optional[bool] = None
    default_source: Optional[Any] = None
    auto_save_analyses: Optional[bool] = None

    def resolve(self) -> NotificationPrefs:
        provided = {key: value for key, value in self.model_dump().items() if value is not None}
        return NotificationPrefs(**provided)


class SettingsResponse(BaseModel):
    user: UserSummary
    prefs: NotificationPrefs


class PrefsResponse(BaseModel):
    prefs: NotificationPrefs
