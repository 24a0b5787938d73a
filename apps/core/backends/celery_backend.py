"""
Celery task backend - hands jobs to a worker through the broker.

Jobs are sent by registered task name, so the web process does not need
to import the task modules.
"""
import logging
import uuid
from typing import Any, Dict

from celery import current_app

from apps.core.task_service import TaskBackend, CHECK_PLAN_RENEWALS, REFRESH_OVERDUE_INVOICES

logger = logging.getLogger(__name__)

CELERY_TASKS = {
    CHECK_PLAN_RENEWALS: "apps.notifications.tasks.check_plan_renewals",
    REFRESH_OVERDUE_INVOICES: "apps.invoices.tasks.refresh_overdue_invoices",
}


class CeleryTaskBackend(TaskBackend):

    def dispatch(
        self,
        task_name: str,
        payload: Dict[str, Any],
        countdown: int = 0,
    ) -> str:
        celery_name = CELERY_TASKS.get(task_name)
        if celery_name is None:
            raise ValueError(f"No Celery task mapped for: {task_name}")

        task_id = str(uuid.uuid4())
        options = {'countdown': countdown} if countdown else {}
        current_app.send_task(celery_name, kwargs=payload, task_id=task_id, **options)

        logger.info(f"[CELERY] Sent {celery_name} (id={task_id})")
        return task_id
