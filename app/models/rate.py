"""
Rate schedule (parking package) model for database.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class BillingMode(str, enum.Enum):
    """How a rate turns a ticket into a charge."""
    HOURLY = "HOURLY"
    FLAT = "FLAT"


class RateSchedule(Base):
    """Rate schedule database model."""

    __tablename__ = "rate_schedules"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    billing_mode = Column(SQLEnum(BillingMode), default=BillingMode.HOURLY, nullable=False)
    # Per hour for HOURLY, fixed charge for FLAT.
    price = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    tickets = relationship("Ticket", back_populates="rate", passive_deletes=True)
