"""API router for version 1."""
from fastapi import APIRouter

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


api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(analysis.router)
api_router.include_router(dashboard.router)
api_router.include_router(history.router)
api_router.include_router(insights.router)
api_router.include_router(reports.router)
api_router.include_router(settings.router)
api_router.include_router(support.router)
