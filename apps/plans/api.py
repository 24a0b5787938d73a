"""
Plans API endpoints.
"""
from typing import List
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import PlanIn, PlanUpdate, PlanOut
from .services import list_plans, get_plan, create_plan, update_plan, delete_plan

router = Router(tags=["Plans"])


@router.get("", response=List[PlanOut], auth=None)
def get_plans(request: HttpRequest):
    require_auth(request)
    return list_plans()


@router.get("/{plan_id}", response=PlanOut, auth=None)
def get_plan_detail(request: HttpRequest, plan_id: UUID):
    require_auth(request)
    plan = get_plan(plan_id)
    if not plan:
        raise HttpError(404, "Plan not found")
    return plan


@router.post("", response=PlanOut, auth=None)
def create_plan_api(request: HttpRequest, payload: PlanIn):
    require_auth(request)
    try:
        return create_plan(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/{plan_id}", response=PlanOut, auth=None)
def update_plan_api(request: HttpRequest, plan_id: UUID, payload: PlanUpdate):
    require_auth(request)
    try:
        plan = update_plan(plan_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not plan:
        raise HttpError(404, "Plan not found")
    return plan


@router.delete("/{plan_id}", response={204: None}, auth=None)
def delete_plan_api(request: HttpRequest, plan_id: UUID):
    require_auth(request)
    if not delete_plan(plan_id):
        raise HttpError(404, "Plan not found")
    return 204, None
