from celery import shared_task
import logging

from .services import refresh_overdue_invoices as refresh_overdue

logger = logging.getLogger(__name__)


@shared_task
def refresh_overdue_invoices():
    """
    Mark PENDING invoices past their due date as OVERDUE.
    Scheduled daily by Celery Beat.
    """
    count = refresh_overdue()
    logger.info(f"Overdue refresh finished: {count} invoice(s) updated")
    return count
