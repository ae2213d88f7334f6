"""
Daily, monthly, summary and trend aggregation over tickets and payments.

Every report is an aggregate query over the stored rows. A ticket belongs to
the day its entry_time falls on, and so does its payment.
"""
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ValidationError
from app.models.payment import Payment
from app.models.rate import RateSchedule
from app.models.ticket import Ticket, TicketStatus
from app.models.vehicle import Vehicle
from app.schemas.report import (
    DailyReport,
    MonthlyDay,
    MonthlyReport,
    MonthlySummary,
    Overview,
    PaymentMethodBreakdown,
    RateBreakdown,
    RecentTicket,
    SummaryReport,
    TodayStats,
    TrendPoint,
)
from app.services.tickets import utcnow

MIN_YEAR = 1900
MAX_YEAR = 2999
RECENT_TICKETS = 10


def _money(value: Any) -> float:
    return round(float(value or 0.0), 2)


def _as_date(value: Any) -> date:
    # SQLite returns DATE() as text, other backends as a date.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_report_date(value: Optional[str]) -> date:
    if not value:
        raise ValidationError("Date parameter is required (YYYY-MM-DD format)")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")


def _day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def _month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    if not MIN_YEAR <= year <= MAX_YEAR or not 1 <= month <= 12:
        raise ValidationError("Invalid year or month format")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


def _entered_between(start: datetime, end: datetime):
    return (Ticket.entry_time >= start, Ticket.entry_time < end)


async def daily_report(db: AsyncSession, day: date) -> DailyReport:
    start, end = _day_bounds(day)
    window = _entered_between(start, end)

    totals = (await db.execute(
        select(
            func.count(Ticket.id),
            func.count(case((Ticket.status == TicketStatus.CLOSED, 1))),
            func.count(case((Ticket.status == TicketStatus.OPEN, 1))),
            func.count(Payment.id),
            func.coalesce(func.sum(Ticket.billed_amount), 0.0),
            func.coalesce(func.sum(Payment.amount_paid), 0.0),
        )
        .select_from(Ticket)
        .outerjoin(Payment, Payment.ticket_id == Ticket.id)
        .where(*window)
    )).one()

    by_method = await db.execute(
        select(Payment.method, func.count(Payment.id), func.sum(Payment.amount_paid))
        .join(Ticket, Ticket.id == Payment.ticket_id)
        .where(*window)
        .group_by(Payment.method)
        .order_by(Payment.method)
    )
    by_rate = await db.execute(
        select(
            RateSchedule.id,
            RateSchedule.name,
            func.count(Ticket.id),
            func.coalesce(func.sum(Ticket.billed_amount), 0.0),
        )
        .join(Ticket, Ticket.rate_id == RateSchedule.id)
        .where(*window)
        .group_by(RateSchedule.id, RateSchedule.name)
        .order_by(RateSchedule.name)
    )

    total, completed, active, paid, fees, payments = totals
    return DailyReport(
        date=day,
        total_tickets=total,
        completed_tickets=completed,
        active_tickets=active,
        paid_tickets=paid,
        total_fees=_money(fees),
        total_payments=_money(payments),
        by_payment_method=[
            PaymentMethodBreakdown(method=method, count=count, total=_money(amount))
            for method, count, amount in by_method.all()
        ],
        by_rate=[
            RateBreakdown(rate_id=rate_id, rate_name=name, count=count, total_fees=_money(amount))
            for rate_id, name, count, amount in by_rate.all()
        ],
    )


async def _per_day_rows(db: AsyncSession, start: datetime, end: datetime) -> List[Any]:
    day = func.date(Ticket.entry_time).label("day")
    result = await db.execute(
        select(
            day,
            func.count(Ticket.id),
            func.count(case((Ticket.status == TicketStatus.CLOSED, 1))),
            func.count(Payment.id),
            func.coalesce(func.sum(Ticket.billed_amount), 0.0),
            func.coalesce(func.sum(Payment.amount_paid), 0.0),
            func.avg(Payment.amount_paid),
        )
        .select_from(Ticket)
        .outerjoin(Payment, Payment.ticket_id == Ticket.id)
        .where(*_entered_between(start, end))
        .group_by(day)
        .order_by(day)
    )
    return result.all()


async def monthly_report(db: AsyncSession, year: int, month: int) -> MonthlyReport:
    start, end = _month_bounds(year, month)

    days: List[MonthlyDay] = []
    for day, total, completed, paid, fees, revenue, average in await _per_day_rows(db, start, end):
        days.append(MonthlyDay(
            date=_as_date(day),
            total_tickets=total,
            completed_tickets=completed,
            paid_tickets=paid,
            unpaid_tickets=completed - paid,
            total_fees=_money(fees),
            total_revenue=_money(revenue),
            average_revenue=_money(average),
        ))

    # Totals come from the rounded daily rows so they add up on the page.
    summary = MonthlySummary(
        total_tickets=sum(d.total_tickets for d in days),
        completed_tickets=sum(d.completed_tickets for d in days),
        paid_tickets=sum(d.paid_tickets for d in days),
        unpaid_tickets=sum(d.unpaid_tickets for d in days),
        total_fees=_money(sum(d.total_fees for d in days)),
        total_revenue=_money(sum(d.total_revenue for d in days)),
    )
    if days:
        summary.average_daily_revenue = _money(summary.total_revenue / len(days))

    return MonthlyReport(year=year, month=month, summary=summary, daily_breakdown=days)


async def _scalar(db: AsyncSession, stmt) -> Any:
    return (await db.execute(stmt)).scalar_one()


async def summary_report(db: AsyncSession, today: Optional[date] = None) -> SummaryReport:
    today = today or utcnow().date()
    start, end = _day_bounds(today)

    overview = Overview(
        total_vehicles=await _scalar(db, select(func.count(Vehicle.id))),
        total_rates=await _scalar(db, select(func.count(RateSchedule.id))),
        total_tickets=await _scalar(db, select(func.count(Ticket.id))),
        total_payments=await _scalar(db, select(func.count(Payment.id))),
        total_revenue=_money(await _scalar(db, select(func.coalesce(func.sum(Payment.amount_paid), 0.0)))),
        active_tickets=await _scalar(
            db, select(func.count(Ticket.id)).where(Ticket.status == TicketStatus.OPEN)
        ),
        unpaid_tickets=await _scalar(
            db,
            select(func.count(Ticket.id))
            .outerjoin(Payment, Payment.ticket_id == Ticket.id)
            .where(Ticket.status == TicketStatus.CLOSED)
            .where(Payment.id.is_(None)),
        ),
    )

    today_row = (await db.execute(
        select(func.count(Ticket.id), func.coalesce(func.sum(Payment.amount_paid), 0.0))
        .select_from(Ticket)
        .outerjoin(Payment, Payment.ticket_id == Ticket.id)
        .where(*_entered_between(start, end))
    )).one()

    recent = await db.execute(
        select(
            Ticket.id,
            Vehicle.plate_number,
            Vehicle.driver_name,
            RateSchedule.name,
            Ticket.entry_time,
            Ticket.status,
            Ticket.billed_amount,
            Payment.amount_paid,
        )
        .select_from(Ticket)
        .join(Vehicle, Vehicle.id == Ticket.vehicle_id)
        .join(RateSchedule, RateSchedule.id == Ticket.rate_id)
        .outerjoin(Payment, Payment.ticket_id == Ticket.id)
        .order_by(Ticket.entry_time.desc(), Ticket.id.desc())
        .limit(RECENT_TICKETS)
    )

    return SummaryReport(
        overview=overview,
        today=TodayStats(tickets=today_row[0], revenue=_money(today_row[1])),
        recent_tickets=[
            RecentTicket(
                ticket_number=row[0],
                plate_number=row[1],
                driver_name=row[2],
                rate_name=row[3],
                entry_time=row[4],
                status=row[5],
                billed_amount=row[6],
                amount_paid=row[7],
            )
            for row in recent.all()
        ],
    )


async def revenue_trends(db: AsyncSession, days: int = 30, today: Optional[date] = None) -> List[TrendPoint]:
    if not 1 <= days <= 366:
        raise ValidationError("days must be between 1 and 366")
    today = today or utcnow().date()
    start = datetime.combine(today - timedelta(days=days - 1), time.min)
    end = datetime.combine(today + timedelta(days=1), time.min)

    return [
        TrendPoint(date=_as_date(day), tickets=total, revenue=_money(revenue))
        for day, total, _completed, _paid, _fees, revenue, _average in await _per_day_rows(db, start, end)
    ]
