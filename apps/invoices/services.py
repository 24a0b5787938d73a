"""
Invoice services.

Invoices reference clients and plans by id; their names are copied onto the
invoice at creation time.
"""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.clients.services import get_client_dto
from apps.plans.services import get_plan_dto
from .models import Invoice, InvoiceStatus, PaymentMethod
from .dtos import InvoiceDTO
from .schemas import InvoiceIn, InvoiceUpdate, PaymentIn

logger = logging.getLogger(__name__)


# =============================================================================
# Cross-app reads
# =============================================================================

def to_invoice_dto(invoice: Invoice) -> InvoiceDTO:
    return InvoiceDTO(
        id=invoice.id,
        client_id=invoice.client_id,
        plan_id=invoice.plan_id,
        due_date=invoice.due_date,
        status=invoice.status,
        client_name=invoice.client_name,
        plan_name=invoice.plan_name,
        amount=invoice.amount,
        issue_date=invoice.issue_date,
        payment_date=invoice.payment_date,
    )


def list_invoice_dtos() -> List[InvoiceDTO]:
    return [to_invoice_dto(i) for i in Invoice.objects.all()]


# =============================================================================
# Validation
# =============================================================================

def _validate(invoice: Invoice) -> None:
    if invoice.amount is None or Decimal(invoice.amount) < 0:
        raise ValueError("Amount must not be negative")
    if invoice.status not in InvoiceStatus.values:
        raise ValueError(f"Unknown invoice status: {invoice.status}")
    if invoice.payment_method and invoice.payment_method not in PaymentMethod.values:
        raise ValueError(f"Unknown payment method: {invoice.payment_method}")
    if invoice.due_date is None:
        raise ValueError("Due date is required")


def _build_invoice(payload: InvoiceIn) -> Invoice:
    """
    Build an unsaved invoice, filling names and amount from client and plan.

    Raises:
        ValueError: if the client or plan does not exist
    """
    client = get_client_dto(payload.client_id)
    if client is None:
        raise ValueError(f"Client {payload.client_id} does not exist")
    plan = get_plan_dto(payload.plan_id)
    if plan is None:
        raise ValueError(f"Plan {payload.plan_id} does not exist")

    invoice = Invoice(
        client_id=client.id,
        plan_id=plan.id,
        client_name=payload.client_name or client.name,
        plan_name=payload.plan_name or plan.name,
        amount=payload.amount if payload.amount is not None else plan.price,
        issue_date=payload.issue_date or timezone.now(),
        due_date=payload.due_date,
        status=payload.status,
    )
    _validate(invoice)
    return invoice


# =============================================================================
# CRUD
# =============================================================================

def list_invoices(
    client_id: Optional[UUID] = None,
    status: Optional[str] = None,
) -> List[Invoice]:
    """Invoices, newest issue date first."""
    queryset = Invoice.objects.all()
    if client_id:
        queryset = queryset.filter(client_id=client_id)
    if status:
        queryset = queryset.filter(status=status)
    return list(queryset)


def get_invoice(invoice_id: UUID) -> Optional[Invoice]:
    try:
        return Invoice.objects.get(id=invoice_id)
    except Invoice.DoesNotExist:
        return None


def create_invoice(payload: InvoiceIn) -> Invoice:
    invoice = _build_invoice(payload)
    invoice.save()
    logger.info("Created invoice %s for client %s", invoice.id, invoice.client_id)
    return invoice


@transaction.atomic
def create_invoices(payloads: Iterable[InvoiceIn]) -> List[Invoice]:
    """
    Create several invoices at once. Either all are created or none.

    Raises:
        ValueError: if any invoice is invalid
    """
    invoices = [_build_invoice(p) for p in payloads]
    for invoice in invoices:
        invoice.save()
    logger.info("Created %d invoice(s) in bulk", len(invoices))
    return invoices


def update_invoice(invoice_id: UUID, payload: InvoiceUpdate) -> Optional[Invoice]:
    invoice = get_invoice(invoice_id)
    if invoice is None:
        return None

    for attr, value in payload.dict(exclude_unset=True).items():
        setattr(invoice, attr, value)
    if invoice.payment_notes is None:
        invoice.payment_notes = ""
    _validate(invoice)
    invoice.save()
    logger.info("Updated invoice %s", invoice.id)
    return invoice


def delete_invoice(invoice_id: UUID) -> bool:
    deleted, _ = Invoice.objects.filter(id=invoice_id).delete()
    if deleted:
        logger.info("Deleted invoice %s", invoice_id)
    return bool(deleted)


def delete_invoices(invoice_ids: Iterable[UUID]) -> int:
    """Delete several invoices. Unknown ids are ignored."""
    deleted, _ = Invoice.objects.filter(id__in=list(invoice_ids)).delete()
    logger.info("Deleted %d invoice(s) in bulk", deleted)
    return deleted


def delete_invoices_for_client(client_id: UUID) -> int:
    deleted, _ = Invoice.objects.filter(client_id=client_id).delete()
    return deleted


# =============================================================================
# Payment & status
# =============================================================================

def register_payment(invoice_id: UUID, payload: PaymentIn) -> Optional[Invoice]:
    """
    Mark an invoice as PAID with the payment details.

    Raises:
        ValueError: on unknown payment method
    """
    if payload.payment_method not in PaymentMethod.values:
        raise ValueError(f"Unknown payment method: {payload.payment_method}")

    invoice = get_invoice(invoice_id)
    if invoice is None:
        return None

    invoice.status = InvoiceStatus.PAID
    invoice.payment_method = payload.payment_method
    invoice.payment_date = payload.payment_date or timezone.now()
    invoice.payment_notes = payload.payment_notes or ""
    invoice.save()

    logger.info("Registered %s payment for invoice %s", invoice.payment_method, invoice.id)
    return invoice


def refresh_overdue_invoices(now=None) -> int:
    """Flip PENDING invoices whose due date has passed to OVERDUE."""
    now = now or timezone.now()
    updated = Invoice.objects.filter(
        status=InvoiceStatus.PENDING,
        due_date__lt=now,
    ).update(status=InvoiceStatus.OVERDUE, updated_at=now)
    if updated:
        logger.info("Marked %d invoice(s) as overdue", updated)
    return updated
