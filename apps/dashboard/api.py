"""
Dashboard API endpoints.
"""
from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID
from ninja import Router, Schema
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from . import analytics_service

router = Router(tags=["Dashboard"])


class MonthSummaryOut(Schema):
    year: int
    month: int
    revenue: Decimal
    revenue_change: Decimal
    expenses: Decimal
    expense_change: Decimal
    profit: Decimal
    active_clients: int
    new_clients: int


class MonthlyTrendOut(Schema):
    year: int
    month: int
    revenue: Decimal
    expenses: Decimal


class NoticeOut(Schema):
    invoice_id: UUID
    client_name: str
    plan_name: str
    amount: Decimal
    due_date: datetime
    days: int
    label: str
    overdue: bool


@router.get("/summary", response=MonthSummaryOut, auth=None)
def get_summary(request: HttpRequest):
    require_auth(request)
    return analytics_service.get_month_summary()


@router.get("/trends", response=List[MonthlyTrendOut], auth=None)
def get_trends(request: HttpRequest, months: int = 6):
    """Revenue and expenses per month, oldest first."""
    require_auth(request)
    if months < 1 or months > 24:
        raise HttpError(400, "months must be between 1 and 24")
    return analytics_service.get_monthly_trends(months)


@router.get("/notices", response=List[NoticeOut], auth=None)
def get_notices(request: HttpRequest):
    """Unpaid invoices overdue or due within five days."""
    require_auth(request)
    return analytics_service.get_important_notices()
