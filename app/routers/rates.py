"""
Rate schedule routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from app.crud import CRUDRepository
from app.database import get_db
from app.exceptions import ConflictError
from app.models.rate import RateSchedule
from app.models.ticket import Ticket
from app.models.user import User
from app.schemas.rate import Rate as RateSchema, RateCreate, RateUpdate
from app.auth import get_current_active_user

router = APIRouter(prefix="/rates", tags=["rates"])

rates = CRUDRepository(RateSchedule, "Rate")


@router.get("/", response_model=List[RateSchema])
async def get_rates(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get all rate schedules.
    """
    return await rates.list(db, skip=skip, limit=limit)


@router.get("/{rate_id}", response_model=RateSchema)
async def get_rate(
    rate_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get a specific rate schedule by ID.
    """
    return await rates.get_or_404(db, rate_id)


@router.post("/", response_model=RateSchema, status_code=status.HTTP_201_CREATED)
async def create_rate(
    rate: RateCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Create a new rate schedule.
    """
    if await rates.get_by(db, name=rate.name):
        raise ConflictError("A rate with this name already exists")

    return await rates.create(db, rate.model_dump())


@router.put("/{rate_id}", response_model=RateSchema)
async def update_rate(
    rate_id: int,
    rate_update: RateUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Update a rate schedule. Closed tickets keep the amount they were billed.
    """
    db_rate = await rates.get_or_404(db, rate_id)
    update_data = rate_update.model_dump(exclude_unset=True)

    name = update_data.get("name")
    if name and name != db_rate.name and await rates.get_by(db, name=name):
        raise ConflictError("A rate with this name already exists")

    return await rates.update(db, db_rate, update_data)


@router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rate(
    rate_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Delete a rate schedule that no ticket references.
    """
    db_rate = await rates.get_or_404(db, rate_id)

    result = await db.execute(select(Ticket.id).where(Ticket.rate_id == rate_id).limit(1))
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Cannot delete rate that is used by parking tickets")

    await rates.delete(db, db_rate)
    return None
