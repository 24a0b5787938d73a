"""DTOs for Invoices app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class InvoiceDTO:
    """Invoice data as read by the renewal check and the dashboard."""
    id: UUID
    client_id: UUID
    plan_id: UUID
    due_date: Optional[datetime]  # None only for malformed export rows
    status: str
    client_name: str = ""
    plan_name: str = ""
    amount: Decimal = Decimal('0.00')
    issue_date: Optional[datetime] = None
    payment_date: Optional[datetime] = None
