"""
System API endpoints: database status, local-storage import and task triggers.
"""
from typing import Any, Dict
from ninja import Router, Schema, Body
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.core.task_service import TaskService
from apps.identity.api import require_auth
from .services import get_db_status, migrate_data

router = Router(tags=["System"])


class DatabaseStatusOut(Schema):
    success: bool
    message: str


class TaskQueuedOut(Schema):
    task_id: str


class MigrationOut(Schema):
    success: bool
    message: str
    clients: int
    plans: int
    invoices: int
    expenses: int
    categories: int
    settings: bool


@router.get("/db-status", response=DatabaseStatusOut, auth=None)
def db_status(request: HttpRequest):
    require_auth(request)
    return get_db_status()


@router.post("/migrate", response=MigrationOut, auth=None)
def migrate(request: HttpRequest, payload: Dict[str, Any] = Body(...)):
    """
    Import a browser local-storage export.
    Nothing is written unless every record imports.
    """
    require_auth(request)
    try:
        result = migrate_data(payload)
    except ValueError as e:
        raise HttpError(400, str(e))

    return {
        "success": True,
        "message": result.message,
        "clients": result.clients,
        "plans": result.plans,
        "invoices": result.invoices,
        "expenses": result.expenses,
        "categories": result.categories,
        "settings": result.settings,
    }


# =============================================================================
# Background tasks (manual trigger)
# =============================================================================

@router.post("/tasks/check-renewals", response=TaskQueuedOut, auth=None)
def queue_renewal_check(request: HttpRequest):
    require_auth(request)
    return {"task_id": TaskService.check_plan_renewals()}


@router.post("/tasks/refresh-overdue", response=TaskQueuedOut, auth=None)
def queue_overdue_refresh(request: HttpRequest):
    require_auth(request)
    return {"task_id": TaskService.refresh_overdue_invoices()}
