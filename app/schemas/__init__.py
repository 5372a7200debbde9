"""Pydantic schemas package."""

from app.schemas.analysis import (
    AnalysisCreate,
    AnalysisListResponse,
    AnalysisRead,
    AnalysisResponse,
    HistoryDetailResponse,
    HistoryItem,
    HistoryListResponse,
    Pagination,
)
from app.schemas.analytics import DashboardSummary, InsightsResponse
from app.schemas.identity import IdentityClaims
from app.schemas.report import (
    ReportGenerateRequest,
    ReportListResponse,
    ReportRead,
    ReportResponse,
)
from app.schemas.settings import (
    NotificationPrefs,
    NotificationPrefsUpdate,
    PrefsResponse,
    SettingsResponse,
)
from app.schemas.support import TicketCreate, TicketListResponse, TicketRead, TicketResponse
from app.schemas.user import AccountDeactivated, UserRead, UserSummary, UserUpdate

__all__ = [
    "AnalysisCreate",
    "AnalysisListResponse",
    "AnalysisRead",
    "AnalysisResponse",
    "HistoryDetailResponse",
    "HistoryItem",
    "HistoryListResponse",
    "Pagination",
    "DashboardSummary",
    "InsightsResponse",
    "IdentityClaims",
    "ReportGenerateRequest",
    "ReportListResponse",
    "ReportRead",
    "ReportResponse",
    "NotificationPrefs",
    "NotificationPrefsUpdate",
    "PrefsResponse",
    "SettingsResponse",
    "TicketCreate",
    "TicketListResponse",
    "TicketRead",
    "TicketResponse",
    "AccountDeactivated",
    "UserRead",
    "UserSummary",
    "UserUpdate",
]
