"""Pydantic models for dashboard and insights endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.analysis import Sentiment
from app.schemas.common import UTCDatetime


class RecentAnalysis(BaseModel):
    id: uuid.UUID
    product_name: str
    score10: int
    sentiment: Sentiment
    created_at: UTCDatetime


class DashboardStats(BaseModel):
    """Headline numbers; averages are rounded to two decimals."""

    total_analyses: int
    avg_score: Optional[float] = None
    best_score: Optional[int] = None
    worst_score: Optional[int] = None
    last_activity_at: Optional[UTCDatetime] = None
    positive_rate: float = 0.0
    active_products: int = 0


class DashboardSummary(BaseModel):
    has_data: bool
    updated_at: UTCDatetime
    stats: Optional[DashboardStats] = None
    recent: List[RecentAnalysis] = Field(default_factory=list)


class SentimentCounts(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class ScoreBuckets(BaseModel):
    low_1_3: int = 0
    mid_4_6: int = 0
    good_7_8: int = 0
    great_9_10: int = 0


class InsightTotals(BaseModel):
    total_analyses: int = 0
    total_reviews: int = 0
    avg_score: Optional[float] = None
    best_score: Optional[int] = None
    worst_score: Optional[int] = None


class SourceStat(BaseModel):
    source: str
    count: int
    avg_score: Optional[float] = None


class ProductStat(BaseModel):
    product_name: str
    count: int
    avg_score: Optional[float] = None


class TrendPoint(BaseModel):
    day: date
    count: int
    avg_score: Optional[float] = None


class InsightsResponse(BaseModel):
    """Whole-population aggregates; averages are left unrounded."""

    has_data: bool
    updated_at: UTCDatetime
    totals: InsightTotals = Field(default_factory=InsightTotals)
    sentiment: SentimentCounts = Field(default_factory=SentimentCounts)
    buckets: ScoreBuckets = Field(default_factory=ScoreBuckets)
    top_sources: List[SourceStat] = Field(default_factory=list)
    top_products: List[ProductStat] = Field(default_factory=list)
    trend_14d: List[TrendPoint] = Field(default_factory=list)


__all__ = [
    "DashboardStats",
    "DashboardSummary",
    "InsightTotals",
    "InsightsResponse",
    "ProductStat",
    "RecentAnalysis",
    "ScoreBuckets",
    "SentimentCounts",
    "SourceStat",
    "TrendPoint",
]
