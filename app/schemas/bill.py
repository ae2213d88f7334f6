"""
Pydantic schemas for printed bills.
"""
from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional
from app.models.rate import BillingMode


class Company(BaseModel):
    name: str
    address: str
    phone: str
    email: str


class BillCustomer(BaseModel):
    name: str
    phone: str
    plate_number: str
    vehicle_type: str


class BillTicket(BaseModel):
    ticket_number: int
    entry_time: datetime
    exit_time: Optional[datetime] = None
    duration_hours: Optional[int] = None
    rate_name: str
    billing_mode: BillingMode
    rate_price: float


class BillPayment(BaseModel):
    payment_number: int
    paid_at: datetime
    amount_paid: float
    method: str


class BillTotals(BaseModel):
    subtotal: float
    discount: float
    tax: float
    total: float
    balance: float


class Bill(BaseModel):
    """Receipt for one payment."""
    bill_number: str
    bill_date: date
    company: Company
    customer: BillCustomer
    ticket: BillTicket
    payment: BillPayment
    billing: BillTotals
