"""Review scoring endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import AnalysisCreate, AnalysisListResponse, AnalysisResponse
from app.services.analysis import AnalysisService

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("", response_model=AnalysisResponse, status_code=status.HTTP_201_CREATED)
def create_analysis(
    payload: AnalysisCreate,
    caller: CallerContext = Depends(deps.get_synced_caller),
    service: AnalysisService = Depends(deps.get_analysis_service),
) -> AnalysisResponse:
    """Score pasted reviews and store the result."""

    analysis = service.submit(user=caller.require_profile(), payload=payload)
    return {"analysis": analysis}


@router.get("", response_model=AnalysisListResponse)
def list_recent_analyses(
    caller: CallerContext = Depends(deps.get_caller),
    service: AnalysisService = Depends(deps.get_analysis_service),
) -> AnalysisListResponse:
    """Return the caller's latest analyses, newest first."""

    return {"analyses": service.list_recent(caller.user_id)}
