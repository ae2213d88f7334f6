"""
Pydantic schemas for Ticket.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from app.models.ticket import TicketStatus
from app.schemas.vehicle import Vehicle
from app.schemas.rate import Rate


class TicketCreate(BaseModel):
    """Schema for opening a ticket."""
    plate_number: str = Field(..., min_length=1, max_length=20)
    rate_id: int
    entry_time: Optional[datetime] = None


class TicketComplete(BaseModel):
    """Optional body for closing a ticket at a recorded exit time."""
    exit_time: Optional[datetime] = None


class Ticket(BaseModel):
    """Schema for ticket responses."""
    id: int
    vehicle_id: int
    rate_id: int
    entry_time: datetime
    exit_time: Optional[datetime] = None
    duration_hours: Optional[int] = None
    billed_amount: Optional[float] = None
    status: TicketStatus
    vehicle: Optional[Vehicle] = None
    rate: Optional[Rate] = None

    model_config = ConfigDict(from_attributes=True)


class TicketCompletion(BaseModel):
    """Result of closing a ticket."""
    ticket_number: int
    plate_number: str
    duration: Optional[int] = None
    billed_amount: float
    closed_at: datetime
    status: TicketStatus

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
