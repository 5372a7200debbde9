"""Profile mirror endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import UserRead, UserUpdate
from app.services.users import UserService
from app.utils.exceptions import ValidationError

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def sync_current_user(
    response: Response,
    caller: CallerContext = Depends(deps.get_caller),
    db: Session = Depends(deps.get_db),
) -> UserRead:
    """Create or refresh the caller's profile row from identity claims.

    Responds 201 on first sync and 200 afterwards.
    """

    try:
        user, created = UserService(db).sync_profile(caller.claims)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    if created:
        response.status_code = status.HTTP_201_CREATED
    return user


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: UserUpdate,
    caller: CallerContext = Depends(deps.get_synced_caller),
    db: Session = Depends(deps.get_db),
) -> UserRead:
    """Allow the authenticated user to update their display name or avatar."""

    return UserService(db).update(caller.require_profile(), payload)
