"""DTOs for Plans app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class PlanDTO:
    """Plan data as read by the renewal check and the invoice screens."""
    id: UUID
    name: str
    plan_type: str
    recurrence_value: Optional[int] = None
    recurrence_period: Optional[str] = None
    price: Decimal = Decimal('0.00')
