"""
Bill routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_db
from app.models.user import User
from app.schemas.bill import Bill
from app.services import bills as bill_service
from app.auth import get_current_active_user

router = APIRouter(prefix="/bills", tags=["bills"])


@router.get("/ticket/{ticket_id}", response_model=Bill)
async def get_bill_for_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_active_user)
):
    """
    Bill for the payment recorded against a ticket.
    """
    return await bill_service.bill_for_ticket(db, ticket_id, settings)


@router.get("/{payment_id}", response_model=Bill)
async def get_bill(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_active_user)
):
    """
    Bill for one payment.
    """
    return await bill_service.bill_for_payment(db, payment_id, settings)
