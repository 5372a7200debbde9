"""Pydantic models for report snapshots."""
from __future__ import annotations

import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.analysis import Sentiment
from app.schemas.analytics import SentimentCounts
from app.schemas.common import UTCDatetime

ReportPreset = Literal["7d", "30d", "90d", "all", "custom"]


class ReportGenerateRequest(BaseModel):
    """Parameters for a new snapshot.

    ``date_from``/``date_to`` are only read for the ``custom`` preset and are
    kept as raw strings: anything that does not parse leaves that side of the
    range open.
    """

    preset: ReportPreset = "30d"
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=255)


class ReportKpis(BaseModel):
    total_analyses: int
    avg_score10: Optional[float] = None
    best_score10: Optional[int] = None
    worst_score10: Optional[int] = None
    last_activity_at: Optional[UTCDatetime] = None


class TopProduct(BaseModel):
    product_name: str
    count: int
    avg_score10: Optional[float] = None
    sentiment_mode: Sentiment


class ReportRead(BaseModel):
    id: uuid.UUID
    user_id: str
    title: str
    preset: ReportPreset
    date_from: Optional[UTCDatetime] = None
    date_to: Optional[UTCDatetime] = None
    kpis: ReportKpis
    sentiment: SentimentCounts
    top_products: List[TopProduct] = Field(default_factory=list)
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class ReportResponse(BaseModel):
    report: ReportRead


class ReportListResponse(BaseModel):
    reports: List[ReportRead] = Field(default_factory=list)
