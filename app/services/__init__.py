"""Service layer package."""

from app.services.analysis import AnalysisService, HistoryQuery
from app.services.analytics import AnalyticsService
from app.services.reports import ReportService
from app.services.settings import PreferencesService
from app.services.support import SupportService
from app.services.users import UserService

__all__ = [
    "AnalysisService",
    "AnalyticsService",
    "HistoryQuery",
    "PreferencesService",
    "ReportService",
    "SupportService",
    "UserService",
]
