"""
Ticket lifecycle: open on entry, close on exit.

Closing is a single transaction holding a row lock on the ticket, so a
ticket is billed exactly once.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud import CRUDRepository
from app.exceptions import AppError, ConflictError, InvalidStateError, NotFoundError, ValidationError
from app.models.rate import RateSchedule
from app.models.ticket import Ticket, TicketStatus
from app.models.vehicle import Vehicle
from app.services.billing import CLAMP, compute_fee

logger = logging.getLogger(__name__)

rates = CRUDRepository(RateSchedule, "Rate")
vehicles = CRUDRepository(Vehicle, "Vehicle")
tickets = CRUDRepository(Ticket, "Ticket")


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def ticket_query():
    return select(Ticket).options(selectinload(Ticket.vehicle), selectinload(Ticket.rate))


async def get_ticket(db: AsyncSession, ticket_id: int) -> Ticket:
    result = await db.execute(
        ticket_query()
        .where(Ticket.id == ticket_id)
        .execution_options(populate_existing=True)
    )
    ticket = result.scalar_one_or_none()
    if ticket is None:
        raise NotFoundError("Ticket not found")
    return ticket


async def list_tickets(
    db: AsyncSession,
    skip: int = 0,
    limit: int = 100,
    status: Optional[TicketStatus] = None,
) -> Sequence[Ticket]:
    stmt = ticket_query()
    if status:
        stmt = stmt.where(Ticket.status == status)
    result = await db.execute(
        stmt.order_by(Ticket.entry_time.desc(), Ticket.id.desc()).offset(skip).limit(limit)
    )
    return result.scalars().all()


async def open_ticket(
    db: AsyncSession,
    plate_number: str,
    rate_id: int,
    entry_time: Optional[datetime] = None,
) -> Ticket:
    plate = (plate_number or "").strip().upper()
    if not plate or not rate_id:
        raise ValidationError("Plate number and rate are required")

    try:
        result = await db.execute(
            select(Vehicle).where(Vehicle.plate_number == plate).with_for_update()
        )
        vehicle = result.scalar_one_or_none()
        if vehicle is None:
            raise NotFoundError("Vehicle not found")

        await rates.get_or_404(db, rate_id)

        active = await db.execute(
            select(Ticket.id)
            .where(Ticket.vehicle_id == vehicle.id)
            .where(Ticket.status == TicketStatus.OPEN)
            .limit(1)
        )
        if active.scalar_one_or_none() is not None:
            raise ConflictError("Vehicle already has an active parking ticket")

        ticket = Ticket(
            vehicle_id=vehicle.id,
            rate_id=rate_id,
            entry_time=as_naive_utc(entry_time) if entry_time else utcnow(),
            status=TicketStatus.OPEN,
        )
        db.add(ticket)
        await db.commit()
    except AppError as exc:
        await db.rollback()
        logger.warning("Ticket not opened for %s: %s", plate, exc.message)
        raise

    logger.info("Opened ticket %s for %s", ticket.id, plate)
    return await get_ticket(db, ticket.id)


async def close_ticket(
    db: AsyncSession,
    ticket_id: int,
    exit_time: Optional[datetime] = None,
    negative_policy: str = CLAMP,
) -> Ticket:
    """Bill an open ticket and mark it CLOSED."""
    try:
        result = await db.execute(
            select(Ticket).where(Ticket.id == ticket_id).with_for_update()
        )
        ticket = result.scalar_one_or_none()
        if ticket is None:
            raise NotFoundError("Ticket not found")
        if ticket.status != TicketStatus.OPEN:
            raise InvalidStateError("Ticket is already completed")

        rate = await rates.get_or_404(db, ticket.rate_id)
        closed_at = as_naive_utc(exit_time) if exit_time else utcnow()
        fee = compute_fee(ticket.entry_time, closed_at, rate.billing_mode, rate.price, negative_policy)

        ticket.exit_time = closed_at
        ticket.duration_hours = fee.duration_hours
        ticket.billed_amount = fee.amount
        ticket.status = TicketStatus.CLOSED
        await db.commit()
    except AppError as exc:
        await db.rollback()
        logger.warning("Ticket %s not closed: %s", ticket_id, exc.message)
        raise

    logger.info(
        "Closed ticket %s: duration=%s billed=%.2f",
        ticket_id, fee.duration_hours, fee.amount,
    )
    return await get_ticket(db, ticket_id)


async def delete_ticket(db: AsyncSession, ticket_id: int) -> None:
    """Remove a ticket. Its payment, if any, goes with it."""
    ticket = await tickets.get_or_404(db, ticket_id)
    await tickets.delete(db, ticket)
    logger.info("Deleted ticket %s", ticket_id)
