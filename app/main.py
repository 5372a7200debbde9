"""FastAPI application factory."""
from __future__ import annotations

from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import api_router
from app.config import settings


tags_metadata: List[dict[str, str]] = [
    {"name": "users", "description": "Mirror identity-provider profiles locally."},
    {"name": "analysis", "description": "Score pasted product reviews."},
    {"name": "dashboard", "description": "Headline metrics and recent activity."},
    {"name": "history", "description": "Search and inspect past analyses."},
    {"name": "insights", "description": "Aggregates over every stored analysis."},
    {"name": "reports", "description": "Frozen report snapshots over a date range."},
    {"name": "settings", "description": "Notification preferences and account status."},
    {"name": "support", "description": "Support tickets."},
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Review trust scores, history and reports for online products.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors()), "message": "Validation failed"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error", "message": str(exc)},
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
