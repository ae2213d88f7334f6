"""
Report routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.database import get_db
from app.models.user import User
from app.schemas.report import DailyReport, MonthlyReport, SummaryReport, TrendPoint
from app.services import reports as report_service
from app.auth import get_current_active_user

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/daily", response_model=DailyReport)
async def get_daily_report(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Ticket counts, fees and payments for tickets that entered on one date.
    """
    return await report_service.daily_report(db, report_service.parse_report_date(date))


@router.get("/daily/{date}", response_model=DailyReport)
async def get_daily_report_by_path(
    date: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Daily report with the date in the path.
    """
    return await report_service.daily_report(db, report_service.parse_report_date(date))


@router.get("/monthly/{year}/{month}", response_model=MonthlyReport)
async def get_monthly_report(
    year: int,
    month: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Per-day breakdown for a month plus totals over the breakdown.
    """
    return await report_service.monthly_report(db, year, month)


@router.get("/summary", response_model=SummaryReport)
async def get_summary(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Dashboard overview, today's totals and the most recent tickets.
    """
    return await report_service.summary_report(db)


@router.get("/trends", response_model=List[TrendPoint])
async def get_trends(
    days: int = 30,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Tickets and revenue per day over the trailing window.
    """
    return await report_service.revenue_trends(db, days=days)
