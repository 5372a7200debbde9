"""History browsing endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import HistoryDetailResponse, HistoryListResponse
from app.services.analysis import AnalysisService, HistoryQuery
from app.utils.exceptions import NotFoundError, handle_not_found

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
def search_history(
    *,
    q: Optional[str] = Query(None, description="Matches product name or source"),
    sentiment: Optional[str] = Query(None, description="positive, neutral, negative or all"),
    min_score: Optional[str] = Query(None),
    max_score: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, description="newest, oldest, score_high or score_low"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    caller: CallerContext = Depends(deps.get_caller),
    service: AnalysisService = Depends(deps.get_analysis_service),
) -> HistoryListResponse:
    """Filter and paginate past analyses. Out-of-range numbers are clamped."""

    query = HistoryQuery.from_params(
        q=q,
        sentiment=sentiment,
        min_score=min_score,
        max_score=max_score,
        sort=sort,
        page=page,
        page_size=page_size,
    )
    return service.search_history(caller.user_id, query)


@router.get("/{analysis_id}", response_model=HistoryDetailResponse)
def read_history_item(
    analysis_id: str,
    caller: CallerContext = Depends(deps.get_caller),
    service: AnalysisService = Depends(deps.get_analysis_service),
) -> HistoryDetailResponse:
    """Return one analysis owned by the caller."""

    try:
        item = service.get_for_user(analysis_id, caller.user_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc
    return {"item": item}
