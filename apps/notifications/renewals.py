"""
Renewal projection.

Given a snapshot of clients, plans and invoices, find recurring
subscriptions whose next invoice falls inside the look-ahead window and has
not been issued yet. Pure functions only; reading the snapshot is the
caller's job.

Months and years are fixed 30 and 365 day spans.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple
from uuid import UUID

from django.utils import timezone

from apps.clients.dtos import ClientDTO
from apps.clients.models import ClientStatus
from apps.invoices.dtos import InvoiceDTO
from apps.plans.dtos import PlanDTO
from apps.plans.models import PlanType, RecurrencePeriod
from .dtos import RenewalAlertDTO

DEFAULT_LOOKAHEAD_DAYS = 5

PERIOD_DAYS = {
    RecurrencePeriod.DAYS: 1,
    RecurrencePeriod.MONTHS: 30,
    RecurrencePeriod.YEARS: 365,
}


def calendar_day(value: datetime) -> date:
    """Start-of-day date of an instant in the configured time zone."""
    if timezone.is_naive(value):
        return value.date()
    return timezone.localtime(value).date()


def recurrence_span(plan: PlanDTO) -> Optional[timedelta]:
    """Length of one billing cycle, or None when the recurrence is unusable."""
    value = plan.recurrence_value
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    unit = PERIOD_DAYS.get(plan.recurrence_period)
    if unit is None:
        return None
    return timedelta(days=value * unit)


def compute_next_due_date(last_due_date: datetime, plan: PlanDTO) -> Optional[datetime]:
    span = recurrence_span(plan)
    if span is None:
        return None
    return last_due_date + span


def project_renewals(
    clients: Iterable[ClientDTO],
    plans: Iterable[PlanDTO],
    invoices: Iterable[InvoiceDTO],
    now: Optional[datetime] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    include_past_activations: bool = True,
) -> List[RenewalAlertDTO]:
    """
    Project upcoming renewals.

    For each subscription of an ACTIVE client to a RECURRING plan:
    - without invoices for that (client, plan), alert at the activation
      date when it falls before the window end (and, unless
      `include_past_activations`, not before `now`);
    - otherwise alert at last due date + one cycle when that lies strictly
      inside (now, now + lookahead) and no invoice already falls on the
      same calendar day.

    Subscriptions whose recurrence cannot be computed are skipped.
    Invoices without a due date are ignored; a subscription whose only
    invoices lack one is skipped.
    """
    now = now or timezone.now()
    window_end = now + timedelta(days=lookahead_days)

    plans_by_id: Dict[UUID, PlanDTO] = {p.id: p for p in plans}

    history: Dict[Tuple[UUID, UUID], List[InvoiceDTO]] = defaultdict(list)
    undated: Set[Tuple[UUID, UUID]] = set()
    for invoice in invoices:
        key = (invoice.client_id, invoice.plan_id)
        if invoice.due_date is None:
            undated.add(key)
        else:
            history[key].append(invoice)

    alerts: List[RenewalAlertDTO] = []
    for client in clients:
        if client.status != ClientStatus.ACTIVE:
            continue

        for sub in client.plans:
            plan = plans_by_id.get(sub.plan_id)
            if plan is None or plan.plan_type != PlanType.RECURRING:
                continue

            issued = sorted(
                history.get((client.id, plan.id), ()),
                key=lambda inv: inv.due_date,
                reverse=True,
            )

            if not issued:
                if (client.id, plan.id) in undated:
                    continue
                activation = sub.activation_date
                if activation is None or not activation < window_end:
                    continue
                if not include_past_activations and activation < now:
                    continue
                next_due = activation
            else:
                next_due = compute_next_due_date(issued[0].due_date, plan)
                if next_due is None or not (now < next_due < window_end):
                    continue
                day = calendar_day(next_due)
                if any(calendar_day(inv.due_date) == day for inv in issued):
                    continue

            alerts.append(RenewalAlertDTO(
                client_id=client.id,
                client_name=client.name,
                plan_id=plan.id,
                plan_name=plan.name,
                next_due_date=next_due,
            ))

    return alerts
