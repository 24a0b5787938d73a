"""
Notification services: upcoming plan renewals and tasks needing attention.
"""
import logging
from datetime import datetime
from typing import List, Optional

from django.conf import settings

from apps.core.data_provider import DataProvider, get_data_provider
from apps.tasks.dtos import TaskDTO
from apps.tasks.services import get_notification_tasks
from .dtos import RenewalCheckResult
from .renewals import project_renewals, DEFAULT_LOOKAHEAD_DAYS

logger = logging.getLogger(__name__)


def get_plan_renewal_alerts(
    provider: Optional[DataProvider] = None,
    now: Optional[datetime] = None,
    lookahead_days: Optional[int] = None,
) -> RenewalCheckResult:
    """
    Read clients, plans and invoices, then project renewals.

    Never raises: a failure is logged and reported through
    `RenewalCheckResult.error` with an empty alert list.
    """
    if lookahead_days is None:
        lookahead_days = getattr(settings, 'RENEWAL_LOOKAHEAD_DAYS', DEFAULT_LOOKAHEAD_DAYS)
    include_past = getattr(settings, 'RENEWAL_ALERT_PAST_ACTIVATIONS', True)

    try:
        provider = provider or get_data_provider()
        clients = provider.list_clients()
        plans = provider.list_plans()
        invoices = provider.list_invoices()

        alerts = project_renewals(
            clients, plans, invoices,
            now=now,
            lookahead_days=lookahead_days,
            include_past_activations=include_past,
        )
    except Exception as e:
        logger.exception("Renewal check failed: %s", e)
        return RenewalCheckResult(alerts=[], error=str(e) or e.__class__.__name__)

    logger.info(
        "Renewal check: %d alert(s) from %d client(s), %d plan(s), %d invoice(s)",
        len(alerts), len(clients), len(plans), len(invoices),
    )
    return RenewalCheckResult(alerts=alerts)


def get_task_notifications() -> List[TaskDTO]:
    """Tasks not DONE and due today or earlier."""
    return get_notification_tasks()
