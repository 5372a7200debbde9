"""Shared API dependencies.

Every route resolves the caller through one of three guards:

* :func:`get_caller` - a verified identity, nothing else;
* :func:`get_synced_caller` - identity plus an existing profile row;
* :func:`get_caller_with_profile` - identity, mirroring claims into ``users``
  first when the token carries an email.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import InvalidTokenError, decode_token
from app.db.models.user import User
from app.db.session import SessionLocal
from app.schemas.identity import IdentityClaims
from app.services.analysis import AnalysisService
from app.services.analytics import AnalyticsService
from app.services.reports import ReportService
from app.services.users import UserService
from app.utils.exceptions import (
    AuthenticationError,
    ProfileNotSyncedError,
    handle_authentication_error,
    handle_profile_not_synced,
)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class CallerContext:
    """The resolved caller. ``profile`` is set only by guards that load it."""

    user_id: str
    claims: IdentityClaims
    profile: User | None = None

    def require_profile(self) -> User:
        if self.profile is None:
            raise ProfileNotSyncedError("User not synced to database", {"user_id": self.user_id})
        return self.profile


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as exc:
        logger.error(f"Database session error: {exc}")
        db.rollback()
        raise
    finally:
        db.close()


def resolve_identity(token: str | None) -> IdentityClaims:
    """Turn a bearer token into identity claims or raise ``AuthenticationError``."""

    if not token:
        raise AuthenticationError("Unauthorized")
    try:
        return IdentityClaims.model_validate(decode_token(token))
    except (InvalidTokenError, PydanticValidationError) as exc:
        raise AuthenticationError("Could not validate credentials") from exc


def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CallerContext:
    """Resolve the caller from the Authorization header."""

    token = credentials.credentials if credentials else None
    try:
        claims = resolve_identity(token)
    except AuthenticationError as exc:
        raise handle_authentication_error(exc) from exc
    return CallerContext(user_id=claims.sub, claims=claims)


def get_synced_caller(
    caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)
) -> CallerContext:
    """Require that the caller's profile has already been mirrored locally."""

    caller.profile = UserService(db).find(caller.user_id)
    try:
        caller.require_profile()
    except ProfileNotSyncedError as exc:
        raise handle_profile_not_synced(exc) from exc
    return caller


def get_caller_with_profile(
    caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)
) -> CallerContext:
    """Upsert the profile from token claims, falling back to the stored row."""

    service = UserService(db)
    if caller.claims.email:
        caller.profile, _ = service.sync_profile(caller.claims)
    else:
        caller.profile = service.find(caller.user_id)
    try:
        caller.require_profile()
    except ProfileNotSyncedError as exc:
        raise handle_profile_not_synced(exc) from exc
    return caller


def get_analysis_service(db: Session = Depends(get_db)) -> AnalysisService:
    return AnalysisService(db)


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


__all__ = [
    "CallerContext",
    "get_analysis_service",
    "get_analytics_service",
    "get_caller",
    "get_caller_with_profile",
    "get_db",
    "get_report_service",
    "get_synced_caller",
    "resolve_identity",
]
