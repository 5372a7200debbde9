"""Support ticket service."""
from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.db.models.support import SupportTicket
from app.schemas.support import TicketCreate


class SupportService:
    def __init__(self, db: Session):
        self.db = db

    def list_tickets(self, user_id: str, *, limit: int | None = None) -> list[SupportTicket]:
        stmt = (
            select(SupportTicket)
            .where(SupportTicket.user_id == user_id, SupportTicket.is_deleted.is_(False))
            .order_by(SupportTicket.created_at.desc())
            .limit(limit or settings.SUPPORT_TICKETS_LIMIT)
        )
        return list(self.db.scalars(stmt))

    def create(self, *, user_id: str, payload: TicketCreate) -> SupportTicket:
        ticket = SupportTicket(
            user_id=user_id,
            subject=payload.subject,
            message=payload.message,
            category=payload.category,
            priority=payload.priority,
            status="open",
            meta=payload.meta.model_dump(exclude_none=True),
        )
        self.db.add(ticket)
        self.db.commit()
        self.db.refresh(ticket)
        logger.info("Support ticket opened", ticket_id=str(ticket.id), user_id=user_id)
        return ticket
