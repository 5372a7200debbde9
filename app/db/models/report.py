"""Frozen report snapshots."""
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.db.types import JSONDocument, JSONObject
from app.utils.dates import utcnow

REPORT_PRESETS = ("7d", "30d", "90d", "all", "custom")


class Report(Base):
    """Aggregates over a user's analyses captured at generation time."""

    __tablename__ = "reports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    preset = Column(String(10), nullable=False)
    date_from = Column(DateTime(timezone=True))
    date_to = Column(DateTime(timezone=True))

    kpis = Column(JSONObject, nullable=False, default=dict)
    sentiment = Column(JSONObject, nullable=False, default=dict)
    top_products = Column(JSONDocument, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
