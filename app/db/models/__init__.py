"""Database models package."""
from app.db.models.analysis import ProductAnalysis
from app.db.models.preferences import NotificationPreference
from app.db.models.report import Report
from app.db.models.support import SupportTicket
from app.db.models.user import User

__all__ = [
    "User",
    "ProductAnalysis",
    "Report",
    "NotificationPreference",
    "SupportTicket",
]
