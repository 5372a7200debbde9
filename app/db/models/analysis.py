"""Scored review submissions."""
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.db.types import JSONObject, StringList
from app.utils.dates import utcnow

ANALYSIS_SOURCES = ("manual", "amazon", "flipkart", "other")


class ProductAnalysis(Base):
    """One review submission together with its heuristic score."""

    __tablename__ = "product_analyses"
    __table_args__ = (
        CheckConstraint("score10 BETWEEN 1 AND 10", name="score10_range"),
        Index("ix_product_analyses_user_created", "user_id", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    source = Column(String(20), nullable=False, default="manual")
    product_name = Column(String(255), nullable=False)
    product_url = Column(Text)
    reviews_text = Column(Text, nullable=False)
    review_count = Column(Integer, nullable=False, default=0)

    # Scoring output, fixed at insert time
    score10 = Column(Integer, nullable=False)
    sentiment = Column(String(20), nullable=False, index=True)
    summary = Column(Text, nullable=False)
    keywords = Column(StringList, nullable=False, default=list)
    aspect_scores = Column(JSONObject, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
