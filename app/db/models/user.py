"""Local mirror of identity-provider users."""
from sqlalchemy import Boolean, Column, DateTime, String, Text

from app.db.base import Base
from app.utils.dates import utcnow


class User(Base):
    """Profile row keyed by the identity provider's user id."""

    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), nullable=False, index=True)
    name = Column(String(255))
    image_url = Column(Text)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def apply_profile(self, *, email: str, name: str | None, image_url: str | None) -> bool:
        """Copy identity claims onto the row and report whether anything changed."""

        changed = (self.email, self.name, self.image_url) != (email, name, image_url)
        self.email = email
        self.name = name
        self.image_url = image_url
        return changed

    def deactivate(self) -> None:
        self.is_active = False
