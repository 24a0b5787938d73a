"""
API Schemas for Invoices app.
"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema

from .models import InvoiceStatus


class InvoiceIn(Schema):
    """
    Schema for creating an invoice.
    Names and amount default to the client's and plan's current values.
    """
    client_id: UUID
    plan_id: UUID
    due_date: datetime
    amount: Optional[Decimal] = None
    issue_date: Optional[datetime] = None
    status: str = InvoiceStatus.PENDING
    client_name: Optional[str] = None
    plan_name: Optional[str] = None


class InvoiceUpdate(Schema):
    amount: Optional[Decimal] = None
    issue_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    payment_notes: Optional[str] = None


class PaymentIn(Schema):
    payment_method: str
    payment_date: Optional[datetime] = None
    payment_notes: str = ""


class BulkInvoiceIn(Schema):
    invoices: List[InvoiceIn]


class BulkDeleteIn(Schema):
    invoice_ids: List[UUID]


class InvoiceOut(Schema):
    id: UUID
    client_id: UUID
    plan_id: UUID
    client_name: str
    plan_name: str
    amount: Decimal
    issue_date: datetime
    due_date: datetime
    status: str
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    payment_notes: str
    created_at: datetime
