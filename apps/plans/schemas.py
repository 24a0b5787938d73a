"""
API Schemas for Plans app.
"""
from decimal import Decimal
from typing import Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema

from .models import PlanType


class PlanIn(Schema):
    name: str
    description: str = ""
    price: Decimal = Decimal('0.00')
    plan_type: str = PlanType.RECURRING
    recurrence_value: Optional[int] = None
    recurrence_period: Optional[str] = None


class PlanUpdate(Schema):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    plan_type: Optional[str] = None
    recurrence_value: Optional[int] = None
    recurrence_period: Optional[str] = None


class PlanOut(Schema):
    id: UUID
    name: str
    description: str
    price: Decimal
    plan_type: str
    recurrence_value: Optional[int] = None
    recurrence_period: Optional[str] = None
    created_at: datetime
