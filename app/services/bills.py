"""
Printable bill for a recorded payment.
"""
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import Settings
from app.exceptions import NotFoundError
from app.models.payment import Payment
from app.models.ticket import Ticket
from app.schemas.bill import Bill, BillCustomer, BillPayment, BillTicket, BillTotals, Company
from app.services.tickets import utcnow


def bill_number(payment_id: int, bill_date: date) -> str:
    """BILL-YYYY-MM-DD-NNNNN"""
    return f"BILL-{bill_date.isoformat()}-{payment_id:05d}"


async def _load_payment(db: AsyncSession, **filters) -> Payment:
    stmt = select(Payment).options(
        selectinload(Payment.ticket).selectinload(Ticket.vehicle),
        selectinload(Payment.ticket).selectinload(Ticket.rate),
    )
    for field, value in filters.items():
        stmt = stmt.where(getattr(Payment, field) == value)
    result = await db.execute(stmt.execution_options(populate_existing=True))
    payment = result.scalar_one_or_none()
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment


def render_bill(payment: Payment, settings: Settings, bill_date: Optional[date] = None) -> Bill:
    ticket = payment.ticket
    vehicle = ticket.vehicle
    rate = ticket.rate
    bill_date = bill_date or utcnow().date()

    subtotal = round(ticket.billed_amount or 0.0, 2)
    total = round(payment.amount_paid, 2)

    return Bill(
        bill_number=bill_number(payment.id, bill_date),
        bill_date=bill_date,
        company=Company(
            name=settings.company_name,
            address=settings.company_address,
            phone=settings.company_phone,
            email=settings.company_email,
        ),
        customer=BillCustomer(
            name=vehicle.driver_name,
            phone=vehicle.phone_number,
            plate_number=vehicle.plate_number,
            vehicle_type=vehicle.vehicle_type,
        ),
        ticket=BillTicket(
            ticket_number=ticket.id,
            entry_time=ticket.entry_time,
            exit_time=ticket.exit_time,
            duration_hours=ticket.duration_hours,
            rate_name=rate.name,
            billing_mode=rate.billing_mode,
            rate_price=rate.price,
        ),
        payment=BillPayment(
            payment_number=payment.id,
            paid_at=payment.paid_at,
            amount_paid=total,
            method=payment.method,
        ),
        billing=BillTotals(
            subtotal=subtotal,
            discount=0.0,
            tax=0.0,
            total=total,
            balance=round(subtotal - total, 2),
        ),
    )


async def bill_for_payment(db: AsyncSession, payment_id: int, settings: Settings) -> Bill:
    return render_bill(await _load_payment(db, id=payment_id), settings)


async def bill_for_ticket(db: AsyncSession, ticket_id: int, settings: Settings) -> Bill:
    return render_bill(await _load_payment(db, ticket_id=ticket_id), settings)
