"""Dashboard and insights aggregates over stored analyses."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.config import settings
from app.core.scoring import SENTIMENTS
from app.db.models.analysis import ProductAnalysis
from app.services.analysis import AnalysisService
from app.utils.cache import cache_backend
from app.utils.dates import coerce_day, utcnow

TOP_SOURCES_LIMIT = 5
TOP_PRODUCTS_LIMIT = 5
TREND_DAYS = 14

SCORE_BUCKETS: tuple[tuple[str, int, int], ...] = (
    ("low_1_3", 1, 3),
    ("mid_4_6", 4, 6),
    ("good_7_8", 7, 8),
    ("great_9_10", 9, 10),
)


def _float_or_none(value: Any) -> float | None:
    return None if value is None else float(value)


def _int_or_none(value: Any) -> int | None:
    return None if value is None else int(value)


def _round2(value: Any) -> float | None:
    return None if value is None else round(float(value), 2)


def empty_insights(now: datetime) -> dict[str, Any]:
    return {
        "has_data": False,
        "updated_at": now,
        "totals": {
            "total_analyses": 0,
            "total_reviews": 0,
            "avg_score": None,
            "best_score": None,
            "worst_score": None,
        },
        "sentiment": {label: 0 for label in SENTIMENTS},
        "buckets": {name: 0 for name, _, _ in SCORE_BUCKETS},
        "top_sources": [],
        "top_products": [],
        "trend_14d": [],
    }


class AnalyticsService:
    """Aggregate a user's analyses for the dashboard and insights pages.

    Each response is composed of several independent reads without an
    enclosing transaction; a concurrent insert can make them disagree slightly.
    """

    def __init__(self, db: Session, *, analysis_service: AnalysisService | None = None) -> None:
        self.db = db
        self.analysis_service = analysis_service or AnalysisService(db)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_dashboard_summary(
        self, *, user_id: str, limit: int = 5, since: datetime | None = None
    ) -> dict[str, Any]:
        """Return headline metrics plus the newest analyses.

        ``since`` narrows only the ``recent`` list so clients can poll for new
        rows; ``stats`` always covers every analysis the user owns.
        """

        now = utcnow()
        stats_row = (
            self.db.query(
                func.count(ProductAnalysis.id),
                func.avg(ProductAnalysis.score10),
                func.max(ProductAnalysis.score10),
                func.min(ProductAnalysis.score10),
                func.max(ProductAnalysis.created_at),
                func.coalesce(
                    func.sum(case((ProductAnalysis.sentiment == "positive", 1), else_=0)), 0
                ),
                func.count(func.distinct(ProductAnalysis.product_name)),
            )
            .filter(ProductAnalysis.user_id == user_id)
            .one()
        )
        total = int(stats_row[0] or 0)
        if total == 0:
            return {"has_data": False, "updated_at": now, "stats": None, "recent": []}

        positive = int(stats_row[5] or 0)
        recent = self.analysis_service.list_since(user_id, limit=limit, since=since)
        return {
            "has_data": True,
            "updated_at": now,
            "stats": {
                "total_analyses": total,
                "avg_score": _round2(stats_row[1]),
                "best_score": _int_or_none(stats_row[2]),
                "worst_score": _int_or_none(stats_row[3]),
                "last_activity_at": stats_row[4],
                "positive_rate": round(positive * 100 / total, 2),
                "active_products": int(stats_row[6] or 0),
            },
            "recent": [
                {
                    "id": row.id,
                    "product_name": row.product_name,
                    "score10": row.score10,
                    "sentiment": row.sentiment,
                    "created_at": row.created_at,
                }
                for row in recent
            ],
        }

    def get_insights(self, *, user_id: str) -> dict[str, Any]:
        """Return whole-population aggregates for the insights page."""

        cached = cache_backend.get("insights", user_id)
        if cached is not None:
            return cached

        now = utcnow()
        owned = ProductAnalysis.user_id == user_id

        totals_row = (
            self.db.query(
                func.count(ProductAnalysis.id),
                func.coalesce(func.sum(ProductAnalysis.review_count), 0),
                func.avg(ProductAnalysis.score10),
                func.max(ProductAnalysis.score10),
                func.min(ProductAnalysis.score10),
            )
            .filter(owned)
            .one()
        )
        total = int(totals_row[0] or 0)
        if total == 0:
            return empty_insights(now)

        payload = {
            "has_data": True,
            "updated_at": now,
            "totals": {
                "total_analyses": total,
                "total_reviews": int(totals_row[1] or 0),
                "avg_score": _float_or_none(totals_row[2]),
                "best_score": _int_or_none(totals_row[3]),
                "worst_score": _int_or_none(totals_row[4]),
            },
            "sentiment": self._sentiment_counts(owned),
            "buckets": self._score_buckets(owned),
            "top_sources": self._top_sources(owned),
            "top_products": self._top_products(owned),
            "trend_14d": self._daily_trend(owned, since=now - timedelta(days=TREND_DAYS)),
        }
        cache_backend.set("insights", user_id, payload, ttl_seconds=settings.INSIGHTS_CACHE_TTL_SECONDS)
        return payload

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _sentiment_counts(self, owned: Any) -> dict[str, int]:
        rows = (
            self.db.query(ProductAnalysis.sentiment, func.count(ProductAnalysis.id))
            .filter(owned)
            .group_by(ProductAnalysis.sentiment)
            .all()
        )
        counts = {label: 0 for label in SENTIMENTS}
        for label, count in rows:
            if label in counts:
                counts[label] = int(count or 0)
        return counts

    def _score_buckets(self, owned: Any) -> dict[str, int]:
        columns = [
            func.coalesce(
                func.sum(case((ProductAnalysis.score10.between(low, high), 1), else_=0)), 0
            ).label(name)
            for name, low, high in SCORE_BUCKETS
        ]
        row = self.db.query(*columns).filter(owned).one()
        return {name: int(row._mapping[name] or 0) for name, _, _ in SCORE_BUCKETS}

    def _top_sources(self, owned: Any) -> list[dict[str, Any]]:
        source = func.coalesce(ProductAnalysis.source, "unknown")
        count = func.count(ProductAnalysis.id)
        rows = (
            self.db.query(source.label("source"), count.label("count"), func.avg(ProductAnalysis.score10))
            .filter(owned)
            .group_by(source)
            .order_by(count.desc(), source.asc())
            .limit(TOP_SOURCES_LIMIT)
            .all()
        )
        return [
            {"source": str(name), "count": int(total or 0), "avg_score": _float_or_none(avg)}
            for name, total, avg in rows
        ]

    def _top_products(self, owned: Any) -> list[dict[str, Any]]:
        count = func.count(ProductAnalysis.id)
        rows = (
            self.db.query(ProductAnalysis.product_name, count, func.avg(ProductAnalysis.score10))
            .filter(owned)
            .group_by(ProductAnalysis.product_name)
            .order_by(count.desc(), ProductAnalysis.product_name.asc())
            .limit(TOP_PRODUCTS_LIMIT)
            .all()
        )
        return [
            {"product_name": str(name), "count": int(total or 0), "avg_score": _float_or_none(avg)}
            for name, total, avg in rows
        ]

    def _daily_trend(self, owned: Any, *, since: datetime) -> list[dict[str, Any]]:
        """Per-day count and average; days without analyses are not emitted."""

        day = func.date(ProductAnalysis.created_at)
        rows = (
            self.db.query(day.label("day"), func.count(ProductAnalysis.id), func.avg(ProductAnalysis.score10))
            .filter(owned)
            .filter(ProductAnalysis.created_at >= since)
            .group_by(day)
            .order_by(day)
            .all()
        )
        return [
            {"day": coerce_day(value).isoformat(), "count": int(total or 0), "avg_score": _float_or_none(avg)}
            for value, total, avg in rows
            if value is not None
        ]


__all__ = ["AnalyticsService", "SCORE_BUCKETS"]
