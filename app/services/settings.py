"""Notification preference storage."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models.preferences import NotificationPreference
from app.schemas.settings import NotificationPrefs, NotificationPrefsUpdate


class PreferencesService:
    """One preferences row per user, created lazily on first save."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, user_id: str) -> NotificationPreference | None:
        stmt = select(NotificationPreference).where(NotificationPreference.user_id == user_id)
        return self.db.scalars(stmt).first()

    def get(self, user_id: str) -> NotificationPrefs:
        row = self._row(user_id)
        if row is None:
            return NotificationPrefs()
        return NotificationPrefs.model_validate(row)

    def save(self, user_id: str, payload: NotificationPrefsUpdate) -> NotificationPrefs:
        """Replace the stored preferences; last write wins."""

        prefs = payload.resolve()
        row = self._row(user_id)
        if row is None:
            row = NotificationPreference(user_id=user_id)
            self.db.add(row)
        for field, value in prefs.model_dump().items():
            setattr(row, field, value)
        self.db.commit()
        return prefs
