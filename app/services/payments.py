"""
Payment recording against completed tickets.
"""
import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import CRUDRepository
from app.exceptions import AppError, ConflictError, InvalidStateError, NotFoundError, ValidationError
from app.models.payment import Payment
from app.models.ticket import Ticket, TicketStatus
from app.services.tickets import as_naive_utc, utcnow

logger = logging.getLogger(__name__)

payments = CRUDRepository(Payment, "Payment")


def normalize_method(method: Optional[str], default: str) -> str:
    return (method or "").strip().upper() or default.upper()


async def list_payments(db: AsyncSession, skip: int = 0, limit: int = 100) -> Sequence[Payment]:
    return await payments.list(
        db, skip=skip, limit=limit, order_by=(Payment.paid_at.desc(), Payment.id.desc())
    )


async def get_payment_for_ticket(db: AsyncSession, ticket_id: int) -> Payment:
    payment = await payments.get_by(db, ticket_id=ticket_id)
    if payment is None:
        raise NotFoundError("Payment not found for this ticket")
    return payment


async def has_payment(db: AsyncSession, ticket_id: int) -> bool:
    result = await db.execute(select(Payment.id).where(Payment.ticket_id == ticket_id))
    return result.scalar_one_or_none() is not None


async def record_payment(
    db: AsyncSession,
    ticket_id: int,
    amount_paid: float,
    method: Optional[str] = None,
    default_method: str = "CASH",
) -> Payment:
    """Record the single payment for a completed ticket.

    The ticket row stays locked from the state check until the insert
    commits, so two concurrent requests cannot both pass the
    duplicate check.
    """
    if not ticket_id or amount_paid is None:
        raise ValidationError("Ticket number and amount paid are required")
    if amount_paid <= 0:
        raise ValidationError("Amount paid must be a positive number")

    try:
        result = await db.execute(
            select(Ticket).where(Ticket.id == ticket_id).with_for_update()
        )
        ticket = result.scalar_one_or_none()
        if ticket is None:
            raise NotFoundError("Ticket not found")
        if ticket.status != TicketStatus.CLOSED:
            raise InvalidStateError("Ticket must be completed before it can be paid")

        if await has_payment(db, ticket_id):
            raise ConflictError("Payment already exists for this ticket")

        payment = Payment(
            ticket_id=ticket_id,
            amount_paid=amount_paid,
            method=normalize_method(method, default_method),
            paid_at=utcnow(),
        )
        db.add(payment)
        try:
            await db.commit()
        except IntegrityError as exc:
            raise ConflictError("Payment already exists for this ticket") from exc
    except AppError as exc:
        await db.rollback()
        logger.warning("Payment for ticket %s rejected: %s", ticket_id, exc.message)
        raise

    await db.refresh(payment)
    logger.info("Recorded payment %s for ticket %s: %.2f %s",
                payment.id, ticket_id, payment.amount_paid, payment.method)
    return payment


async def update_payment(
    db: AsyncSession,
    payment_id: int,
    amount_paid: Optional[float] = None,
    method: Optional[str] = None,
    paid_at: Optional[datetime] = None,
) -> Payment:
    payment = await payments.get_or_404(db, payment_id)
    changes = {}
    if amount_paid is not None:
        if amount_paid <= 0:
            raise ValidationError("Amount paid must be a positive number")
        changes["amount_paid"] = amount_paid
    if method is not None:
        changes["method"] = normalize_method(method, payment.method)
    if paid_at is not None:
        changes["paid_at"] = as_naive_utc(paid_at)
    return await payments.update(db, payment, changes)


async def delete_payment(db: AsyncSession, payment_id: int) -> None:
    payment = await payments.get_or_404(db, payment_id)
    await payments.delete(db, payment)
    logger.info("Deleted payment %s for ticket %s", payment_id, payment.ticket_id)
