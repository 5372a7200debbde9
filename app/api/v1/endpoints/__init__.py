"""API endpoint modules for v1."""

from app.api.v1.endpoints import (
    analysis,
    dashboard,
    history,
    insights,
    reports,
    settings,
    support,
    users,
)

__all__ = [
    "analysis",
    "dashboard",
    "history",
    "insights",
    "reports",
    "settings",
    "support",
    "users",
]
