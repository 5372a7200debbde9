"""Review submission, history search and detail lookups."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.config import settings
from app.core.scoring import MAX_SCORE, MIN_SCORE, SENTIMENTS, clamp, score_reviews
from app.db.models.analysis import ProductAnalysis
from app.db.models.user import User
from app.schemas.analysis import AnalysisCreate
from app.utils.cache import cache_backend
from app.utils.exceptions import NotFoundError
from app.utils.ids import parse_uuid

PAGE_SIZE_MIN = 5
PAGE_SIZE_MAX = 50
PAGE_MAX = 999_999

HISTORY_SORTS = ("newest", "oldest", "score_high", "score_low")


def _as_int(value: Any, default: int) -> int:
    """Truncate numeric input toward zero; blanks and non-numbers give ``default``."""

    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return int(number) if math.isfinite(number) else default


@dataclass(slots=True)
class HistoryQuery:
    """Normalised history filters; build with :meth:`from_params`."""

    q: str = ""
    sentiment: str = "all"
    min_score: int = MIN_SCORE
    max_score: int = MAX_SCORE
    sort: str = "newest"
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_params(
        cls,
        *,
        q: str | None = None,
        sentiment: str | None = None,
        min_score: int | str | None = None,
        max_score: int | str | None = None,
        sort: str | None = None,
        page: int | str | None = None,
        page_size: int | str | None = None,
    ) -> "HistoryQuery":
        """Numeric params may be raw query strings; junk falls back to the default."""

        sentiment = (sentiment or "all").strip()
        sort = (sort or "newest").strip()
        return cls(
            q=(q or "").strip(),
            sentiment=sentiment if sentiment in SENTIMENTS else "all",
            min_score=clamp(_as_int(min_score, MIN_SCORE), MIN_SCORE, MAX_SCORE),
            max_score=clamp(_as_int(max_score, MAX_SCORE), MIN_SCORE, MAX_SCORE),
            sort=sort if sort in HISTORY_SORTS else "newest",
            page=clamp(_as_int(page, 1), 1, PAGE_MAX),
            page_size=clamp(_as_int(page_size, 10), PAGE_SIZE_MIN, PAGE_SIZE_MAX),
        )


def _order_by(sort: str) -> tuple[Any, ...]:
    created, ident = ProductAnalysis.created_at, ProductAnalysis.id
    if sort == "oldest":
        return (created.asc(), ident.asc())
    if sort == "score_high":
        return (ProductAnalysis.score10.desc(), created.desc(), ident.asc())
    if sort == "score_low":
        return (ProductAnalysis.score10.asc(), created.desc(), ident.asc())
    return (created.desc(), ident.desc())


class AnalysisService:
    """Owner-scoped access to ``product_analyses``."""

    def __init__(self, db: Session):
        self.db = db

    def submit(self, *, user: User, payload: AnalysisCreate) -> ProductAnalysis:
        """Score the submitted text and store the result for ``user``."""

        result = score_reviews(payload.reviews_text)
        analysis = ProductAnalysis(
            user_id=user.id,
            source=payload.source,
            product_name=payload.product_name,
            product_url=payload.product_url,
            reviews_text=payload.reviews_text,
            review_count=payload.review_count,
            score10=result.score10,
            sentiment=result.sentiment,
            summary=result.summary,
            keywords=result.keywords,
            aspect_scores={},
        )
        self.db.add(analysis)
        self.db.commit()
        self.db.refresh(analysis)

        cache_backend.invalidate("insights", user.id)
        logger.info(
            "Analysis stored",
            analysis_id=str(analysis.id),
            user_id=user.id,
            score10=analysis.score10,
            sentiment=analysis.sentiment,
        )
        return analysis

    def list_recent(self, user_id: str, *, limit: int | None = None) -> list[ProductAnalysis]:
        stmt = (
            select(ProductAnalysis)
            .where(ProductAnalysis.user_id == user_id)
            .order_by(ProductAnalysis.created_at.desc(), ProductAnalysis.id.desc())
            .limit(limit or settings.RECENT_ANALYSES_LIMIT)
        )
        return list(self.db.scalars(stmt))

    def list_since(
        self, user_id: str, *, limit: int, since: datetime | None = None
    ) -> list[ProductAnalysis]:
        """Newest-first page, optionally only rows created after ``since``."""

        stmt = select(ProductAnalysis).where(ProductAnalysis.user_id == user_id)
        if since is not None:
            stmt = stmt.where(ProductAnalysis.created_at > since)
        stmt = stmt.order_by(ProductAnalysis.created_at.desc(), ProductAnalysis.id.desc()).limit(limit)
        return list(self.db.scalars(stmt))

    def get_for_user(self, analysis_id: uuid.UUID | str, user_id: str) -> ProductAnalysis:
        """Return the caller's analysis; foreign rows look exactly like missing ones."""

        parsed = parse_uuid(analysis_id)
        if parsed is None:
            raise NotFoundError("Analysis not found")
        stmt = select(ProductAnalysis).where(
            ProductAnalysis.id == parsed, ProductAnalysis.user_id == user_id
        )
        analysis = self.db.scalars(stmt).first()
        if analysis is None:
            raise NotFoundError("Analysis not found")
        return analysis

    def search_history(self, user_id: str, query: HistoryQuery) -> dict[str, Any]:
        """Filter, sort and paginate the caller's analyses.

        An inverted score range is not swapped and simply matches nothing. The
        requested page is clamped into ``[1, total_pages]``.
        """

        conditions = [ProductAnalysis.user_id == user_id]
        if query.q:
            pattern = f"%{query.q}%"
            conditions.append(
                or_(
                    ProductAnalysis.product_name.ilike(pattern),
                    ProductAnalysis.source.ilike(pattern),
                )
            )
        if query.sentiment != "all":
            conditions.append(ProductAnalysis.sentiment == query.sentiment)
        conditions.append(ProductAnalysis.score10 >= query.min_score)
        conditions.append(ProductAnalysis.score10 <= query.max_score)

        total = int(
            self.db.scalar(select(func.count(ProductAnalysis.id)).where(*conditions)) or 0
        )
        total_pages = max(1, math.ceil(total / query.page_size))
        page = clamp(query.page, 1, total_pages)

        stmt = (
            select(ProductAnalysis)
            .where(*conditions)
            .order_by(*_order_by(query.sort))
            .offset((page - 1) * query.page_size)
            .limit(query.page_size)
        )
        return {
            "items": list(self.db.scalars(stmt)),
            "pagination": {
                "page": page,
                "page_size": query.page_size,
                "total": total,
                "total_pages": total_pages,
            },
        }


__all__ = ["AnalysisService", "HistoryQuery"]
