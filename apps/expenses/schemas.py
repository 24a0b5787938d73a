"""
API Schemas for Expenses app.
"""
from decimal import Decimal
from typing import Optional
from uuid import UUID
from datetime import date, datetime
from ninja import Schema

from .models import ExpenseStatus


class ExpenseIn(Schema):
    description: str
    amount: Decimal
    due_date: date
    status: str = ExpenseStatus.PENDING
    category_id: Optional[UUID] = None


class ExpenseUpdate(Schema):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    due_date: Optional[date] = None
    status: Optional[str] = None
    category_id: Optional[UUID] = None


class ExpenseOut(Schema):
    id: UUID
    description: str
    amount: Decimal
    due_date: date
    status: str
    category_id: Optional[UUID] = None
    category_name: Optional[str] = None
    created_at: datetime

    @staticmethod
    def resolve_category_name(obj):
        return obj.category.name if obj.category_id else None


class CategoryIn(Schema):
    name: str


class CategoryOut(Schema):
    id: UUID
    name: str
