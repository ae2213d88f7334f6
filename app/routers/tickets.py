"""
Parking ticket routes.
"""
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.config import Settings, get_settings
from app.database import get_db
from app.models.ticket import TicketStatus
from app.models.user import User
from app.schemas.ticket import Ticket as TicketSchema, TicketComplete, TicketCompletion, TicketCreate
from app.services import tickets as ticket_service
from app.auth import get_current_active_user

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("/", response_model=List[TicketSchema])
async def get_tickets(
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[TicketStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get tickets, newest first, with an optional status filter.
    """
    return await ticket_service.list_tickets(db, skip=skip, limit=limit, status=status_filter)


@router.get("/{ticket_id}", response_model=TicketSchema)
async def get_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get a specific ticket by ID.
    """
    return await ticket_service.get_ticket(db, ticket_id)


@router.post("/", response_model=TicketSchema, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    ticket: TicketCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Open a ticket for a registered vehicle entering the lot.
    """
    return await ticket_service.open_ticket(
        db, ticket.plate_number, ticket.rate_id, entry_time=ticket.entry_time
    )


@router.put("/{ticket_id}/complete", response_model=TicketCompletion)
async def complete_ticket(
    ticket_id: int,
    body: Optional[TicketComplete] = Body(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_active_user)
):
    """
    Close an open ticket and bill it.
    """
    ticket = await ticket_service.close_ticket(
        db,
        ticket_id,
        exit_time=body.exit_time if body else None,
        negative_policy=settings.negative_duration_policy,
    )
    return TicketCompletion(
        ticket_number=ticket.id,
        plate_number=ticket.vehicle.plate_number,
        duration=ticket.duration_hours,
        billed_amount=ticket.billed_amount,
        closed_at=ticket.exit_time,
        status=ticket.status,
    )


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Delete a ticket together with its payment.
    """
    await ticket_service.delete_ticket(db, ticket_id)
    return None
