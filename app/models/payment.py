"""
Payment model for database.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Payment(Base):
    """Payment database model."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    # unique: at most one payment per ticket
    ticket_id = Column(Integer, ForeignKey("tickets.id", ondelete="CASCADE"), unique=True, nullable=False)
    amount_paid = Column(Float, nullable=False)
    method = Column(String(30), nullable=False)
    paid_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    ticket = relationship("Ticket", back_populates="payment")
