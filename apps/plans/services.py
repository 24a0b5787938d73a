"""
Plan services.
"""
import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from .models import Plan, PlanType, RecurrencePeriod
from .dtos import PlanDTO
from .schemas import PlanIn, PlanUpdate

logger = logging.getLogger(__name__)


def to_plan_dto(plan: Plan) -> PlanDTO:
    return PlanDTO(
        id=plan.id,
        name=plan.name,
        plan_type=plan.plan_type,
        recurrence_value=plan.recurrence_value,
        recurrence_period=plan.recurrence_period,
        price=plan.price,
    )


def get_plan_dto(plan_id: UUID) -> Optional[PlanDTO]:
    """
    Get a Plan as a DTO for cross-app communication.
    Used by invoices to denormalize the plan name.
    """
    try:
        return to_plan_dto(Plan.objects.get(id=plan_id))
    except Plan.DoesNotExist:
        return None


def list_plan_dtos() -> List[PlanDTO]:
    return [to_plan_dto(p) for p in Plan.objects.all()]


def _validate(plan: Plan) -> None:
    """
    Normalize recurrence fields and reject inconsistent plans.

    Raises:
        ValueError: on blank name, negative price, unknown type, or a
            recurring plan without a positive recurrence
    """
    if not (plan.name or '').strip():
        raise ValueError("Plan name is required")
    if plan.price is None or Decimal(plan.price) < 0:
        raise ValueError("Price must not be negative")
    if plan.plan_type not in PlanType.values:
        raise ValueError(f"Unknown plan type: {plan.plan_type}")

    if plan.plan_type == PlanType.ONE_TIME:
        plan.recurrence_value = None
        plan.recurrence_period = None
        return

    if not plan.recurrence_value or plan.recurrence_value <= 0:
        raise ValueError("Recurring plans need a positive recurrence value")
    if plan.recurrence_period not in RecurrencePeriod.values:
        raise ValueError("Recurring plans need a recurrence period (DAYS, MONTHS or YEARS)")


def list_plans() -> List[Plan]:
    return list(Plan.objects.all())


def get_plan(plan_id: UUID) -> Optional[Plan]:
    try:
        return Plan.objects.get(id=plan_id)
    except Plan.DoesNotExist:
        return None


def create_plan(payload: PlanIn) -> Plan:
    plan = Plan(**payload.dict())
    _validate(plan)
    plan.save()
    logger.info("Created plan %s (%s)", plan.id, plan.name)
    return plan


def update_plan(plan_id: UUID, payload: PlanUpdate) -> Optional[Plan]:
    plan = get_plan(plan_id)
    if plan is None:
        return None

    for attr, value in payload.dict(exclude_unset=True).items():
        setattr(plan, attr, value)
    _validate(plan)
    plan.save()
    logger.info("Updated plan %s", plan.id)
    return plan


def delete_plan(plan_id: UUID) -> bool:
    deleted, _ = Plan.objects.filter(id=plan_id).delete()
    if deleted:
        logger.info("Deleted plan %s", plan_id)
    return bool(deleted)
