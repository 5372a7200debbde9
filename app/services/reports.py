"""Report snapshot generation and retrieval."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Any

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.config import settings
from app.core.scoring import SENTIMENTS, sentiment_for_score
from app.db.models.analysis import ProductAnalysis
from app.db.models.report import Report
from app.schemas.report import ReportGenerateRequest
from app.utils.dates import iso_or_none, parse_iso_datetime, utcnow
from app.utils.exceptions import NotFoundError
from app.utils.ids import parse_uuid

PRESET_DAYS = {"7d": 7, "30d": 30, "90d": 90}
REPORT_TOP_PRODUCTS_LIMIT = 8


def resolve_range(
    preset: str,
    date_from: str | None = None,
    date_to: str | None = None,
    *,
    now: datetime | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Translate a preset into ``(from, to)``; ``None`` means unbounded."""

    if preset == "all":
        return None, None
    if preset == "custom":
        return parse_iso_datetime(date_from), parse_iso_datetime(date_to)
    now = now or utcnow()
    return now - timedelta(days=PRESET_DAYS[preset]), now


def _round2(value: Any) -> float | None:
    return None if value is None else round(float(value), 2)


class ReportService:
    """Build immutable snapshots; nothing here updates a stored report."""

    def __init__(self, db: Session):
        self.db = db

    def generate(self, *, user_id: str, payload: ReportGenerateRequest) -> Report:
        date_from, date_to = resolve_range(payload.preset, payload.date_from, payload.date_to)

        conditions = [ProductAnalysis.user_id == user_id]
        if date_from is not None:
            conditions.append(ProductAnalysis.created_at >= date_from)
        if date_to is not None:
            conditions.append(ProductAnalysis.created_at <= date_to)

        report = Report(
            user_id=user_id,
            title=(payload.title or "").strip() or f"Report ({payload.preset.upper()})",
            preset=payload.preset,
            date_from=date_from,
            date_to=date_to,
            kpis=self._kpis(conditions),
            sentiment=self._sentiment(conditions),
            top_products=self._top_products(conditions),
        )
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)
        logger.info(
            "Report generated",
            report_id=str(report.id),
            user_id=user_id,
            preset=report.preset,
            total_analyses=report.kpis["total_analyses"],
        )
        return report

    def list_reports(self, user_id: str, *, limit: int | None = None) -> list[Report]:
        stmt = (
            select(Report)
            .where(Report.user_id == user_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(limit or settings.REPORTS_LIST_LIMIT)
        )
        return list(self.db.scalars(stmt))

    def get_for_user(self, report_id: uuid.UUID | str, user_id: str) -> Report:
        parsed = parse_uuid(report_id)
        if parsed is None:
            raise NotFoundError("Report not found")
        stmt = select(Report).where(Report.id == parsed, Report.user_id == user_id)
        report = self.db.scalars(stmt).first()
        if report is None:
            raise NotFoundError("Report not found")
        return report

    def _kpis(self, conditions: list[Any]) -> dict[str, Any]:
        row = self.db.execute(
            select(
                func.count(ProductAnalysis.id),
                func.avg(ProductAnalysis.score10),
                func.max(ProductAnalysis.score10),
                func.min(ProductAnalysis.score10),
                func.max(ProductAnalysis.created_at),
            ).where(*conditions)
        ).one()
        return {
            "total_analyses": int(row[0] or 0),
            "avg_score10": _round2(row[1]),
            "best_score10": None if row[2] is None else int(row[2]),
            "worst_score10": None if row[3] is None else int(row[3]),
            "last_activity_at": iso_or_none(row[4]),
        }

    def _sentiment(self, conditions: list[Any]) -> dict[str, int]:
        rows = self.db.execute(
            select(ProductAnalysis.sentiment, func.count(ProductAnalysis.id))
            .where(*conditions)
            .group_by(ProductAnalysis.sentiment)
        ).all()
        counts = {label: 0 for label in SENTIMENTS}
        for label, count in rows:
            if label in counts:
                counts[label] = int(count or 0)
        return counts

    def _top_products(self, conditions: list[Any]) -> list[dict[str, Any]]:
        count = func.count(ProductAnalysis.id)
        rows = self.db.execute(
            select(ProductAnalysis.product_name, count, func.avg(ProductAnalysis.score10))
            .where(*conditions)
            .group_by(ProductAnalysis.product_name)
            .order_by(count.desc(), ProductAnalysis.product_name.asc())
            .limit(REPORT_TOP_PRODUCTS_LIMIT)
        ).all()
        products = []
        for name, total, avg in rows:
            avg_score = _round2(avg)
            products.append(
                {
                    "product_name": name,
                    "count": int(total or 0),
                    "avg_score10": avg_score,
                    "sentiment_mode": "neutral" if avg_score is None else sentiment_for_score(avg_score),
                }
            )
        return products


__all__ = ["ReportService", "resolve_range"]
