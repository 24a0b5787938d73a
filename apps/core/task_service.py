"""
TaskService - runs the project's background jobs through a configurable backend.

Two jobs exist, both also scheduled daily by Celery Beat:
- check_plan_renewals: log the subscriptions that need an invoice soon
- refresh_overdue_invoices: flip past-due PENDING invoices to OVERDUE

Usage:
    from apps.core.task_service import TaskService

    task_id = TaskService.check_plan_renewals()

Environment Configuration:
    TASK_BACKEND=local   # Run in the calling process (development, tests)
    TASK_BACKEND=celery  # Hand off to a Celery worker
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

CHECK_PLAN_RENEWALS = "check_plan_renewals"
REFRESH_OVERDUE_INVOICES = "refresh_overdue_invoices"

BACKENDS = {
    'local': 'apps.core.backends.local_backend.LocalTaskBackend',
    'celery': 'apps.core.backends.celery_backend.CeleryTaskBackend',
}


class TaskBackend(ABC):
    """
    Something that can run a named job.

    Implementations:
    - LocalTaskBackend: calls the registered handler right away
    - CeleryTaskBackend: sends the job to the broker by task name
    """

    @abstractmethod
    def dispatch(
        self,
        task_name: str,
        payload: Dict[str, Any],
        countdown: int = 0,
    ) -> str:
        """
        Run or enqueue a job.

        Args:
            task_name: One of the job names defined in this module
            payload: Keyword arguments for the job
            countdown: Seconds to wait before running (queued backends only)

        Returns:
            An id for the run
        """


def _get_backend() -> TaskBackend:
    """Instantiate the backend named by the TASK_BACKEND setting."""
    name = getattr(settings, 'TASK_BACKEND', 'local')
    path = BACKENDS.get(name)
    if path is None:
        raise ValueError(f"Unknown TASK_BACKEND: {name}")
    return import_string(path)()


class TaskService:
    """
    Entry point for triggering jobs outside the beat schedule.
    """

    @staticmethod
    def run(task_name: str, payload: Optional[Dict[str, Any]] = None, countdown: int = 0) -> str:
        logger.info("Dispatching %s", task_name)
        return _get_backend().dispatch(task_name, payload or {}, countdown=countdown)

    @staticmethod
    def check_plan_renewals() -> str:
        """Used by: POST /api/system/tasks/check-renewals."""
        return TaskService.run(CHECK_PLAN_RENEWALS)

    @staticmethod
    def refresh_overdue_invoices() -> str:
        """Used by: POST /api/system/tasks/refresh-overdue."""
        return TaskService.run(REFRESH_OVERDUE_INVOICES)
