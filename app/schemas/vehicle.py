"""
Pydantic schemas for Vehicle.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional


def _normalize_plate(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().upper()
    if not value:
        raise ValueError("Plate number cannot be empty")
    return value


class VehicleBase(BaseModel):
    """Base vehicle schema with common fields."""
    plate_number: str = Field(..., max_length=20)
    vehicle_type: str = Field(..., min_length=1, max_length=50)
    driver_name: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=30)

    @field_validator("plate_number")
    @classmethod
    def normalize_plate(cls, value):
        return _normalize_plate(value)


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle."""
    pass


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""
    plate_number: Optional[str] = Field(None, max_length=20)
    vehicle_type: Optional[str] = Field(None, min_length=1, max_length=50)
    driver_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, min_length=1, max_length=30)

    @field_validator("plate_number")
    @classmethod
    def normalize_plate(cls, value):
        return _normalize_plate(value)


class Vehicle(VehicleBase):
    """Schema for vehicle responses."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
