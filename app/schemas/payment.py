"""
Pydantic schemas for Payment.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""
    ticket_id: int
    amount_paid: float = Field(..., gt=0)
    method: Optional[str] = Field(None, max_length=30)


class PaymentUpdate(BaseModel):
    """Schema for updating a payment."""
    amount_paid: Optional[float] = Field(None, gt=0)
    method: Optional[str] = Field(None, min_length=1, max_length=30)
    paid_at: Optional[datetime] = None


class Payment(BaseModel):
    """Schema for payment responses."""
    id: int
    ticket_id: int
    amount_paid: float
    method: str
    paid_at: datetime

    model_config = ConfigDict(from_attributes=True)
