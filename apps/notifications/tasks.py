from celery import shared_task
import logging

from .services import get_plan_renewal_alerts

logger = logging.getLogger(__name__)


@shared_task
def check_plan_renewals():
    """
    Run the renewal check and log what is coming due.
    Scheduled daily by Celery Beat.
    """
    result = get_plan_renewal_alerts()
    if not result.ok:
        logger.error(f"Renewal check could not read data: {result.error}")
        return {"ok": False, "alerts": 0}

    for alert in result.alerts:
        logger.info(
            f"Renewal due {alert.next_due_date:%Y-%m-%d}: "
            f"{alert.client_name} / {alert.plan_name}"
        )
    return {"ok": True, "alerts": len(result.alerts)}
