"""
Pydantic schemas for report payloads.

Reports serialise with camelCase keys, the shape the dashboard consumes.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
import datetime as dt
from typing import List, Optional
from app.models.ticket import TicketStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentMethodBreakdown(CamelModel):
    method: str
    count: int
    total: float


class RateBreakdown(CamelModel):
    rate_id: int
    rate_name: str
    count: int
    total_fees: float


class DailyReport(CamelModel):
    """Aggregate over all tickets that entered on one date."""
    date: dt.date
    total_tickets: int = 0
    completed_tickets: int = 0
    active_tickets: int = 0
    paid_tickets: int = 0
    total_fees: float = 0.0
    total_payments: float = 0.0
    by_payment_method: List[PaymentMethodBreakdown] = []
    by_rate: List[RateBreakdown] = []


class MonthlyDay(CamelModel):
    date: dt.date
    total_tickets: int
    completed_tickets: int
    paid_tickets: int
    unpaid_tickets: int
    total_fees: float
    total_revenue: float
    average_revenue: float


class MonthlySummary(CamelModel):
    total_tickets: int = 0
    completed_tickets: int = 0
    paid_tickets: int = 0
    unpaid_tickets: int = 0
    total_fees: float = 0.0
    total_revenue: float = 0.0
    average_daily_revenue: float = 0.0


class MonthlyReport(CamelModel):
    year: int
    month: int
    summary: MonthlySummary
    daily_breakdown: List[MonthlyDay]


class Overview(CamelModel):
    total_vehicles: int
    total_rates: int
    total_tickets: int
    total_payments: int
    total_revenue: float
    active_tickets: int
    unpaid_tickets: int


class TodayStats(CamelModel):
    tickets: int
    revenue: float


class RecentTicket(CamelModel):
    ticket_number: int
    plate_number: str
    driver_name: str
    rate_name: str
    entry_time: dt.datetime
    status: TicketStatus
    billed_amount: Optional[float] = None
    amount_paid: Optional[float] = None


class SummaryReport(CamelModel):
    overview: Overview
    today: TodayStats
    recent_tickets: List[RecentTicket]


class TrendPoint(CamelModel):
    date: dt.date
    tickets: int
    revenue: float
