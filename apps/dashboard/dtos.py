"""
Data Transfer Objects for the dashboard.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class MonthSummaryDTO:
    """Current month totals compared with the previous month."""
    year: int
    month: int
    revenue: Decimal
    revenue_change: Decimal
    expenses: Decimal
    expense_change: Decimal
    profit: Decimal
    active_clients: int
    new_clients: int


@dataclass(frozen=True)
class MonthlyTrendDTO:
    """Monthly trend data point."""
    year: int
    month: int
    revenue: Decimal
    expenses: Decimal


@dataclass(frozen=True)
class NoticeDTO:
    """An unpaid invoice that is overdue or due soon."""
    invoice_id: UUID
    client_name: str
    plan_name: str
    amount: Decimal
    due_date: datetime
    days: int
    label: str
    overdue: bool
