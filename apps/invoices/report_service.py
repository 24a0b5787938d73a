"""
Invoice PDF generation.
Uses WeasyPrint to render the invoice HTML template.
"""
import logging
from io import BytesIO
from typing import Optional

from django.template.loader import render_to_string
from django.utils import timezone

from apps.company.services import get_company_settings_dto
from .models import Invoice

logger = logging.getLogger(__name__)


def _get_weasyprint():
    """Lazy import WeasyPrint to avoid import errors if not installed."""
    try:
        from weasyprint import HTML
        return HTML
    except ImportError:
        logger.error("WeasyPrint is not installed. Install with: pip install weasyprint")
        raise ImportError(
            "WeasyPrint is required for PDF generation. "
            "Install it with: pip install weasyprint"
        )


def render_invoice_html(invoice: Invoice) -> str:
    company = get_company_settings_dto()
    context = {
        'invoice': invoice,
        'company': company,
        'issue_date': timezone.localtime(invoice.issue_date),
        'due_date': timezone.localtime(invoice.due_date),
        'payment_date': timezone.localtime(invoice.payment_date) if invoice.payment_date else None,
        'status_label': invoice.get_status_display(),
        'payment_method_label': invoice.get_payment_method_display() if invoice.payment_method else '',
        'generated_at': timezone.localtime(),
    }
    return render_to_string('invoices/invoice.html', context)


def generate_invoice_pdf(invoice: Invoice, base_url: Optional[str] = None) -> bytes:
    """
    Render an invoice to PDF.

    Args:
        invoice: The invoice to render
        base_url: Used to resolve relative URLs such as the company logo

    Returns:
        PDF file as bytes
    """
    HTML = _get_weasyprint()

    html_content = render_invoice_html(invoice)

    pdf_file = BytesIO()
    HTML(string=html_content, base_url=base_url).write_pdf(pdf_file)
    pdf_file.seek(0)

    logger.info("Generated PDF for invoice %s", invoice.id)
    return pdf_file.read()
