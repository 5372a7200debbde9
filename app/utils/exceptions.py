"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class RevixException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(RevixException):
    """The caller's identity could not be resolved."""


class ProfileNotSyncedError(RevixException):
    """The identity resolved but no local profile row exists yet."""


class ValidationError(RevixException):
    """Data validation errors."""


class NotFoundError(RevixException):
    """Missing record, or a record owned by somebody else."""


PROFILE_SYNC_HINT = "Call GET /api/v1/users/me once after sign-in to create the profile row."


def handle_authentication_error(error: AuthenticationError) -> HTTPException:
    """Handle authentication errors."""
    logger.warning(f"Authentication error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def handle_profile_not_synced(error: ProfileNotSyncedError) -> HTTPException:
    """Handle submissions from identities without a mirrored profile."""
    logger.bind(**error.details).warning(f"Profile not synced: {error.message}")
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"message": error.message, "hint": PROFILE_SYNC_HINT},
    )


def handle_not_found(error: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
