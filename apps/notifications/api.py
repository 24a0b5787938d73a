"""
Notifications API endpoints.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from ninja import Router, Schema
from django.http import HttpRequest

from apps.identity.api import require_auth
from apps.tasks.schemas import TaskOut
from .services import get_plan_renewal_alerts, get_task_notifications

router = Router(tags=["Notifications"])


class RenewalAlertOut(Schema):
    client_id: UUID
    client_name: str
    plan_id: UUID
    plan_name: str
    next_due_date: datetime


class RenewalCheckOut(Schema):
    ok: bool
    error: Optional[str] = None
    alerts: List[RenewalAlertOut]


@router.get("/renewals", response=RenewalCheckOut, auth=None)
def get_renewals(request: HttpRequest):
    """
    Recurring subscriptions whose next invoice is due within the
    look-ahead window and not yet issued.
    """
    require_auth(request)
    result = get_plan_renewal_alerts()
    return {"ok": result.ok, "error": result.error, "alerts": result.alerts}


@router.get("/tasks", response=List[TaskOut], auth=None)
def get_tasks(request: HttpRequest):
    require_auth(request)
    return get_task_notifications()
