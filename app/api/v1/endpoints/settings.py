"""Settings page endpoints: notification preferences and account deactivation."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import AccountDeactivated, NotificationPrefsUpdate, PrefsResponse, SettingsResponse
from app.services.settings import PreferencesService
from app.services.users import UserService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def read_settings(
    caller: CallerContext = Depends(deps.get_caller_with_profile),
    db: Session = Depends(deps.get_db),
) -> SettingsResponse:
    """Return the synced profile and stored (or default) preferences."""

    prefs = PreferencesService(db).get(caller.user_id)
    return {"user": caller.require_profile(), "prefs": prefs}


@router.put("", response_model=PrefsResponse)
def update_settings(
    payload: NotificationPrefsUpdate,
    caller: CallerContext = Depends(deps.get_synced_caller),
    db: Session = Depends(deps.get_db),
) -> PrefsResponse:
    """Replace notification preferences; omitted fields reset to defaults."""

    return {"prefs": PreferencesService(db).save(caller.user_id, payload)}


@router.post("/delete-account", response_model=AccountDeactivated)
def deactivate_account(
    caller: CallerContext = Depends(deps.get_caller),
    db: Session = Depends(deps.get_db),
) -> AccountDeactivated:
    """Mark the account inactive. Stored analyses and reports are kept."""

    UserService(db).deactivate(caller.user_id)
    return {"success": True}
