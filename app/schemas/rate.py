"""
Pydantic schemas for RateSchedule.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from app.models.rate import BillingMode


class RateBase(BaseModel):
    """Base rate schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    billing_mode: BillingMode = BillingMode.HOURLY
    price: float = Field(..., ge=0)


class RateCreate(RateBase):
    """Schema for creating a rate."""
    pass


class RateUpdate(BaseModel):
    """Schema for updating a rate."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    billing_mode: Optional[BillingMode] = None
    price: Optional[float] = Field(None, ge=0)


class Rate(RateBase):
    """Schema for rate responses."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
