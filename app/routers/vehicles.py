"""
Vehicle routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_, select
from typing import List, Optional

from app.crud import CRUDRepository
from app.database import get_db
from app.exceptions import ConflictError
from app.models.ticket import Ticket
from app.models.vehicle import Vehicle
from app.models.user import User
from app.schemas.vehicle import Vehicle as VehicleSchema, VehicleCreate, VehicleUpdate
from app.auth import get_current_active_user

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

vehicles = CRUDRepository(Vehicle, "Vehicle")


@router.get("/", response_model=List[VehicleSchema])
async def get_vehicles(
    skip: int = 0,
    limit: int = 100,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get all vehicles with pagination, optionally filtered by plate or driver.
    """
    query = select(Vehicle)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(Vehicle.plate_number.ilike(pattern), Vehicle.driver_name.ilike(pattern)))
    return await vehicles.list(db, skip=skip, limit=limit, stmt=query)


@router.get("/{vehicle_id}", response_model=VehicleSchema)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get a specific vehicle by ID.
    """
    return await vehicles.get_or_404(db, vehicle_id)


@router.post("/", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Register a new vehicle.
    """
    # Check if plate number already exists
    if await vehicles.get_by(db, plate_number=vehicle.plate_number):
        raise ConflictError("Plate number already registered")

    return await vehicles.create(db, vehicle.model_dump())


@router.put("/{vehicle_id}", response_model=VehicleSchema)
async def update_vehicle(
    vehicle_id: int,
    vehicle_update: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Update a vehicle.
    """
    db_vehicle = await vehicles.get_or_404(db, vehicle_id)
    update_data = vehicle_update.model_dump(exclude_unset=True)

    plate = update_data.get("plate_number")
    if plate and plate != db_vehicle.plate_number and await vehicles.get_by(db, plate_number=plate):
        raise ConflictError("Plate number already registered")

    return await vehicles.update(db, db_vehicle, update_data)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Delete a vehicle that has no parking history.
    """
    db_vehicle = await vehicles.get_or_404(db, vehicle_id)

    result = await db.execute(select(Ticket.id).where(Ticket.vehicle_id == vehicle_id).limit(1))
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Cannot delete vehicle with existing parking tickets")

    await vehicles.delete(db, db_vehicle)
    return None
