"""
Parking ticket model for database.
"""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class TicketStatus(str, enum.Enum):
    """Ticket status enumeration."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Ticket(Base):
    """Ticket database model.

    entry_time and exit_time are naive UTC.
    """

    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    rate_id = Column(Integer, ForeignKey("rate_schedules.id", ondelete="RESTRICT"), nullable=False, index=True)
    entry_time = Column(DateTime, nullable=False, index=True)
    exit_time = Column(DateTime, nullable=True)
    duration_hours = Column(Integer, nullable=True)
    billed_amount = Column(Float, nullable=True)
    status = Column(SQLEnum(TicketStatus), default=TicketStatus.OPEN, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    vehicle = relationship("Vehicle", back_populates="tickets")
    rate = relationship("RateSchedule", back_populates="tickets")
    payment = relationship("Payment", back_populates="ticket", uselist=False, cascade="all, delete-orphan")
