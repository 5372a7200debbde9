"""Pydantic models for review submissions and history."""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import settings
from app.schemas.common import UTCDatetime

AnalysisSource = Literal["manual", "amazon", "flipkart", "other"]
Sentiment = Literal["positive", "neutral", "negative"]


class AnalysisCreate(BaseModel):
    """Review text submitted for scoring."""

    source: AnalysisSource = "manual"
    product_name: str
    product_url: Optional[str] = None
    reviews_text: str
    review_count: int = Field(default=0, ge=0)

    @field_validator("source", mode="before")
    @classmethod
    def default_source(cls, value: Any) -> Any:
        return "manual" if value is None else value

    @field_validator("product_name")
    @classmethod
    def require_product_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Product name is required")
        return value

    @field_validator("product_url")
    @classmethod
    def blank_url_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("reviews_text")
    @classmethod
    def require_review_text(cls, value: str) -> str:
        value = value.strip()
        if len(value) < settings.MIN_REVIEW_TEXT_LENGTH:
            raise ValueError(
                f"Please provide at least {settings.MIN_REVIEW_TEXT_LENGTH} characters of reviews"
            )
        return value


class AnalysisRead(BaseModel):
    """Full stored analysis."""

    id: uuid.UUID
    user_id: str
    source: str
    product_name: str
    product_url: Optional[str] = None
    reviews_text: str
    review_count: int
    score10: int
    sentiment: Sentiment
    summary: str
    keywords: List[str] = Field(default_factory=list)
    aspect_scores: Dict[str, Any] = Field(default_factory=dict)
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class AnalysisResponse(BaseModel):
    analysis: AnalysisRead


class AnalysisListResponse(BaseModel):
    analyses: List[AnalysisRead] = Field(default_factory=list)


class HistoryItem(BaseModel):
    """Compact row for the history table."""

    id: uuid.UUID
    product_name: str
    source: str
    score10: int
    sentiment: Sentiment
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class HistoryListResponse(BaseModel):
    items: List[HistoryItem] = Field(default_factory=list)
    pagination: Pagination


class HistoryDetailResponse(BaseModel):
    item: AnalysisRead
