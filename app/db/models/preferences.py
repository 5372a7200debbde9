"""Per-user notification preferences."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.utils.dates import utcnow


class NotificationPreference(Base):
    """Email toggles and analysis defaults chosen on the settings page."""

    __tablename__ = "notification_prefs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    email_product_insights = Column(Boolean, nullable=False, default=True)
    email_weekly_digest = Column(Boolean, nullable=False, default=False)
    email_security_alerts = Column(Boolean, nullable=False, default=True)
    default_source = Column(String(20), nullable=False, default="manual")
    auto_save_analyses = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
