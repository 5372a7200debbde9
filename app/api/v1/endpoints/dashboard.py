"""Dashboard summary endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import DashboardSummary
from app.services.analytics import AnalyticsService
from app.utils.dates import parse_iso_datetime

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def read_dashboard_summary(
    *,
    limit: int = Query(5, ge=1, le=20),
    since: Optional[str] = Query(None, description="ISO timestamp; only newer rows are listed"),
    caller: CallerContext = Depends(deps.get_caller),
    service: AnalyticsService = Depends(deps.get_analytics_service),
) -> DashboardSummary:
    """Return top-line metrics and the most recent analyses."""

    return service.get_dashboard_summary(
        user_id=caller.user_id, limit=limit, since=parse_iso_datetime(since)
    )
