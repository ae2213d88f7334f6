"""
Payment routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.config import Settings, get_settings
from app.database import get_db
from app.models.user import User
from app.schemas.payment import Payment as PaymentSchema, PaymentCreate, PaymentUpdate
from app.services import payments as payment_service
from app.auth import get_current_active_user

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/", response_model=List[PaymentSchema])
async def get_payments(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get all payments, newest first.
    """
    return await payment_service.list_payments(db, skip=skip, limit=limit)


@router.get("/ticket/{ticket_id}", response_model=PaymentSchema)
async def get_payment_for_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get the payment recorded for a ticket.
    """
    return await payment_service.get_payment_for_ticket(db, ticket_id)


@router.get("/{payment_id}", response_model=PaymentSchema)
async def get_payment(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Get a specific payment by ID.
    """
    return await payment_service.payments.get_or_404(db, payment_id)


@router.post("/", response_model=PaymentSchema, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_active_user)
):
    """
    Record the payment for a completed ticket. A ticket can be paid once.
    """
    return await payment_service.record_payment(
        db,
        payment.ticket_id,
        payment.amount_paid,
        method=payment.method,
        default_method=settings.default_payment_method,
    )


@router.put("/{payment_id}", response_model=PaymentSchema)
async def update_payment(
    payment_id: int,
    payment_update: PaymentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Update a payment's amount, method or date.
    """
    return await payment_service.update_payment(db, payment_id, **payment_update.model_dump(exclude_unset=True))


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Delete a payment. The ticket can then be paid again.
    """
    await payment_service.delete_payment(db, payment_id)
    return None
