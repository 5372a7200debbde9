"""Insights endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import InsightsResponse
from app.services.analytics import AnalyticsService

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=InsightsResponse)
def read_insights(
    caller: CallerContext = Depends(deps.get_caller),
    service: AnalyticsService = Depends(deps.get_analytics_service),
) -> InsightsResponse:
    """Return sentiment, score-band, source, product and trend aggregates."""

    return service.get_insights(user_id=caller.user_id)
