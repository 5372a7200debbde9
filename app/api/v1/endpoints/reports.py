"""Report snapshot endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import ReportGenerateRequest, ReportListResponse, ReportResponse
from app.services.reports import ReportService
from app.utils.exceptions import NotFoundError, handle_not_found

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=ReportListResponse)
def list_reports(
    caller: CallerContext = Depends(deps.get_caller),
    service: ReportService = Depends(deps.get_report_service),
) -> ReportListResponse:
    """Return the caller's most recent snapshots."""

    return {"reports": service.list_reports(caller.user_id)}


@router.post("/generate", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def generate_report(
    payload: ReportGenerateRequest,
    caller: CallerContext = Depends(deps.get_caller),
    service: ReportService = Depends(deps.get_report_service),
) -> ReportResponse:
    """Freeze KPIs for the requested date range into a new report."""

    return {"report": service.generate(user_id=caller.user_id, payload=payload)}


@router.get("/{report_id}", response_model=ReportResponse)
def read_report(
    report_id: str,
    caller: CallerContext = Depends(deps.get_caller),
    service: ReportService = Depends(deps.get_report_service),
) -> ReportResponse:
    try:
        report = service.get_for_user(report_id, caller.user_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc
    return {"report": report}
