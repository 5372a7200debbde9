"""Service layer for the profile mirror."""
from __future__ import annotations

from loguru import logger
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.schemas.identity import IdentityClaims
from app.schemas.user import UserUpdate
from app.utils.exceptions import ProfileNotSyncedError, ValidationError


class UserService:
    """Keeps the local ``users`` table in step with identity-provider claims."""

    def __init__(self, db: Session):
        self.db = db

    def find(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get(self, user_id: str) -> User:
        """Return the mirrored profile or raise ``ProfileNotSyncedError``."""

        user = self.find(user_id)
        if not user:
            raise ProfileNotSyncedError("User not synced to database", {"user_id": user_id})
        return user

    def sync_profile(self, claims: IdentityClaims) -> tuple[User, bool]:
        """Insert or refresh the profile row from token claims.

        Returns the row and whether it was created by this call.
        """

        if not claims.email:
            raise ValidationError("No email found in identity claims")

        user = self.find(claims.sub)
        created = user is None
        if created:
            user = User(id=claims.sub, email=claims.email, name=claims.name, image_url=claims.image_url)
            self.db.add(user)
        elif not user.apply_profile(email=claims.email, name=claims.name, image_url=claims.image_url):
            return user, False

        self.db.commit()
        self.db.refresh(user)
        if created:
            logger.info("Profile mirrored", user_id=user.id)
        return user, created

    def update(self, user: User, payload: UserUpdate) -> User:
        """Persist user profile changes and return the updated entity."""

        update_data = payload.model_dump(exclude_unset=True, exclude_none=True, mode="json")
        for field, value in update_data.items():
            setattr(user, field, value)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def deactivate(self, user_id: str) -> None:
        """Flag the account inactive; analyses and reports are left in place."""

        user = self.find(user_id)
        if user is None:
            return
        user.deactivate()
        self.db.commit()
        logger.info("Account deactivated", user_id=user_id)
