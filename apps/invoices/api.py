"""
Invoices API endpoints.

CRUD plus bulk create/delete, payment registration and PDF download.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest, HttpResponse

from apps.identity.api import require_auth
from .schemas import (
    InvoiceIn, InvoiceUpdate, InvoiceOut, PaymentIn, BulkInvoiceIn, BulkDeleteIn,
)
from .services import (
    list_invoices, get_invoice, create_invoice, create_invoices, update_invoice,
    delete_invoice, delete_invoices, register_payment, refresh_overdue_invoices,
)

router = Router(tags=["Invoices"])


# =============================================================================
# Bulk & maintenance
# =============================================================================

@router.post("/bulk", response=List[InvoiceOut], auth=None)
def create_invoices_api(request: HttpRequest, payload: BulkInvoiceIn):
    """Create several invoices in one transaction."""
    require_auth(request)
    try:
        return create_invoices(payload.invoices)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.post("/bulk-delete", auth=None)
def delete_invoices_api(request: HttpRequest, payload: BulkDeleteIn):
    require_auth(request)
    return {"deleted": delete_invoices(payload.invoice_ids)}


@router.post("/refresh-overdue", auth=None)
def refresh_overdue_api(request: HttpRequest):
    """Mark PENDING invoices past due as OVERDUE."""
    require_auth(request)
    return {"updated": refresh_overdue_invoices()}


# =============================================================================
# CRUD
# =============================================================================

@router.get("", response=List[InvoiceOut], auth=None)
def get_invoices(
    request: HttpRequest,
    client_id: Optional[UUID] = None,
    status: Optional[str] = None,
):
    """
    List invoices, newest issue date first.

    Query Parameters:
    - client_id: Only invoices of this client
    - status: PAID, PENDING or OVERDUE
    """
    require_auth(request)
    return list_invoices(client_id=client_id, status=status)


@router.get("/{invoice_id}", response=InvoiceOut, auth=None)
def get_invoice_detail(request: HttpRequest, invoice_id: UUID):
    require_auth(request)
    invoice = get_invoice(invoice_id)
    if not invoice:
        raise HttpError(404, "Invoice not found")
    return invoice


@router.post("", response=InvoiceOut, auth=None)
def create_invoice_api(request: HttpRequest, payload: InvoiceIn):
    require_auth(request)
    try:
        return create_invoice(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/{invoice_id}", response=InvoiceOut, auth=None)
def update_invoice_api(request: HttpRequest, invoice_id: UUID, payload: InvoiceUpdate):
    require_auth(request)
    try:
        invoice = update_invoice(invoice_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not invoice:
        raise HttpError(404, "Invoice not found")
    return invoice


@router.delete("/{invoice_id}", response={204: None}, auth=None)
def delete_invoice_api(request: HttpRequest, invoice_id: UUID):
    require_auth(request)
    if not delete_invoice(invoice_id):
        raise HttpError(404, "Invoice not found")
    return 204, None


@router.post("/{invoice_id}/payment", response=InvoiceOut, auth=None)
def register_payment_api(request: HttpRequest, invoice_id: UUID, payload: PaymentIn):
    """Mark the invoice as PAID."""
    require_auth(request)
    try:
        invoice = register_payment(invoice_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not invoice:
        raise HttpError(404, "Invoice not found")
    return invoice


@router.get("/{invoice_id}/pdf", auth=None)
def download_invoice_pdf(request: HttpRequest, invoice_id: UUID):
    """Download the invoice as a PDF with the company header."""
    from . import report_service

    require_auth(request)
    invoice = get_invoice(invoice_id)
    if not invoice:
        raise HttpError(404, "Invoice not found")

    try:
        pdf_content = report_service.generate_invoice_pdf(
            invoice,
            base_url=request.build_absolute_uri('/'),
        )
    except ImportError as e:
        raise HttpError(500, str(e))
    except Exception as e:
        raise HttpError(500, f"Failed to generate invoice: {str(e)}")

    response = HttpResponse(pdf_content, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="invoice_{invoice.id}.pdf"'
    return response
