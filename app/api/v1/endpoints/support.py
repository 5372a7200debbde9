"""Support ticket endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.api.deps import CallerContext
from app.schemas import TicketCreate, TicketListResponse, TicketResponse
from app.services.support import SupportService

router = APIRouter(prefix="/support", tags=["support"])


@router.get("", response_model=TicketListResponse)
def list_tickets(
    caller: CallerContext = Depends(deps.get_caller),
    db: Session = Depends(deps.get_db),
) -> TicketListResponse:
    return {"tickets": SupportService(db).list_tickets(caller.user_id)}


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: TicketCreate,
    caller: CallerContext = Depends(deps.get_caller_with_profile),
    db: Session = Depends(deps.get_db),
) -> TicketResponse:
    """Open a new ticket with status ``open``."""

    return {"ticket": SupportService(db).create(user_id=caller.user_id, payload=payload)}
