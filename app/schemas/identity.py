"""Identity token claims."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IdentityClaims(BaseModel):
    """Claims extracted from an identity-provider token."""

    sub: str = Field(min_length=1)
    exp: Optional[datetime] = None
    email: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
