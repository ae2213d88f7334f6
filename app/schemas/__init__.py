"""
Pydantic schemas for request/response validation.
"""
from app.schemas.vehicle import VehicleBase, VehicleCreate, VehicleUpdate, Vehicle
from app.schemas.rate import RateBase, RateCreate, RateUpdate, Rate
from app.schemas.ticket import TicketCreate, TicketComplete, Ticket, TicketCompletion
from app.schemas.payment import PaymentCreate, PaymentUpdate, Payment
from app.schemas.user import UserBase, UserCreate, User, Token, LoginRequest
from app.schemas.report import DailyReport, MonthlyReport, SummaryReport, TrendPoint
from app.schemas.bill import Bill

__all__ = [
    "VehicleBase", "VehicleCreate", "VehicleUpdate", "Vehicle",
    "RateBase", "RateCreate", "RateUpdate", "Rate",
    "TicketCreate", "TicketComplete", "Ticket", "TicketCompletion",
    "PaymentCreate", "PaymentUpdate", "Payment",
    "UserBase", "UserCreate", "User", "Token", "LoginRequest",
    "DailyReport", "MonthlyReport", "SummaryReport", "TrendPoint",
    "Bill",
]
