"""
SQLAlchemy database models.
"""
from app.models.user import User, UserRole
from app.models.vehicle import Vehicle
from app.models.rate import RateSchedule, BillingMode
from app.models.ticket import Ticket, TicketStatus
from app.models.payment import Payment

__all__ = [
    "User", "UserRole",
    "Vehicle",
    "RateSchedule", "BillingMode",
    "Ticket", "TicketStatus",
    "Payment",
]
