"""DTOs for Expenses app."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class ExpenseDTO:
    """Expense data as read by the dashboard."""
    id: UUID
    description: str
    amount: Decimal
    due_date: date
    status: str
    category_id: Optional[UUID] = None
