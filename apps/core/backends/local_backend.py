"""
Local task backend - runs jobs in the calling process.

Meant for development and tests: the HTTP request that triggers a job
waits for it to finish.
"""
import logging
import uuid
from typing import Any, Callable, Dict

from apps.core.task_service import TaskBackend, CHECK_PLAN_RENEWALS, REFRESH_OVERDUE_INVOICES

logger = logging.getLogger(__name__)

# Job name -> handler
TASK_HANDLERS: Dict[str, Callable[..., Any]] = {}


def register_handler(task_name: str):
    def decorator(func):
        TASK_HANDLERS[task_name] = func
        return func
    return decorator


class LocalTaskBackend(TaskBackend):

    def dispatch(
        self,
        task_name: str,
        payload: Dict[str, Any],
        countdown: int = 0,
    ) -> str:
        handler = TASK_HANDLERS.get(task_name)
        if handler is None:
            raise ValueError(f"No local handler for task: {task_name}")

        run_id = str(uuid.uuid4())
        if countdown:
            logger.warning(f"[LOCAL] Ignoring countdown={countdown} for {task_name}")

        try:
            result = handler(**payload)
        except Exception:
            logger.exception(f"[LOCAL] {task_name} ({run_id}) failed")
            raise

        logger.info(f"[LOCAL] {task_name} ({run_id}): {result}")
        return run_id


# =============================================================================
# Handlers
# =============================================================================

@register_handler(CHECK_PLAN_RENEWALS)
def handle_check_plan_renewals():
    from apps.notifications.services import get_plan_renewal_alerts

    result = get_plan_renewal_alerts()
    if not result.ok:
        return f"renewal check failed: {result.error}"
    return f"{len(result.alerts)} renewal(s) due"


@register_handler(REFRESH_OVERDUE_INVOICES)
def handle_refresh_overdue_invoices():
    from apps.invoices.services import refresh_overdue_invoices

    return f"{refresh_overdue_invoices()} invoice(s) marked overdue"
