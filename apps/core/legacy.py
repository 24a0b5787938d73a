"""
Reader for the browser local-storage export.

The export is a JSON object whose keys are the storage keys
(`sativar-clients`, `sativar-plans`, ...; the prefix is optional) and whose
values are either the collection itself or the JSON string that
local storage held. Dates are written as {"__type": "Date", "value": iso};
older exports used Timestamp-like {"seconds", "nanoseconds"} objects.
Enumerations use the Portuguese labels shown by the browser app.
"""
import json
import logging
import math
import uuid
from datetime import datetime, time, timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.clients.dtos import ClientDTO, SubscriptionDTO
from apps.clients.models import ClientStatus
from apps.invoices.dtos import InvoiceDTO
from apps.invoices.models import InvoiceStatus, PaymentMethod
from apps.plans.dtos import PlanDTO
from apps.plans.models import PlanType, RecurrencePeriod
from apps.expenses.models import ExpenseStatus

logger = logging.getLogger(__name__)

STORAGE_PREFIX = 'sativar-'

# Collection name -> accepted keys in the export
COLLECTION_KEYS = {
    'clients': ('clients',),
    'plans': ('plans',),
    'invoices': ('invoices',),
    'expenses': ('expenses',),
    'expense_categories': ('expenseCategories', 'expense-categories', 'expense_categories'),
    'settings': ('companySettings', 'company-settings', 'settings'),
}

CLIENT_STATUS = {
    'Ativo': ClientStatus.ACTIVE,
    'Inativo': ClientStatus.INACTIVE,
}

PLAN_TYPE = {
    'recurring': PlanType.RECURRING,
    'one-time': PlanType.ONE_TIME,
}

RECURRENCE_PERIOD = {
    'dias': RecurrencePeriod.DAYS,
    'meses': RecurrencePeriod.MONTHS,
    'anos': RecurrencePeriod.YEARS,
}

INVOICE_STATUS = {
    'Paga': InvoiceStatus.PAID,
    'Pendente': InvoiceStatus.PENDING,
    'Vencida': InvoiceStatus.OVERDUE,
}

PAYMENT_METHOD = {
    'Pix': PaymentMethod.PIX,
    'Cartão de Crédito': PaymentMethod.CREDIT_CARD,
    'Cartão de Débito': PaymentMethod.DEBIT_CARD,
}

EXPENSE_STATUS = {
    'Paga': ExpenseStatus.PAID,
    'Pendente': ExpenseStatus.PENDING,
}

# Deterministic ids for records whose legacy id is not a UUID
LEGACY_NAMESPACE = uuid.UUID('6f1c1c1e-5a8e-4b8e-9a57-0c6c2b1d9e41')


# =============================================================================
# Value decoding
# =============================================================================

def _is_timestamp_like(value) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get('seconds'), (int, float))
        and isinstance(value.get('nanoseconds'), (int, float))
    )


def revive(value: Any) -> Any:
    """Recursively turn Date/Timestamp markers into aware datetimes."""
    if isinstance(value, list):
        return [revive(v) for v in value]
    if not isinstance(value, dict):
        return value

    if value.get('__type') == 'Date' and isinstance(value.get('value'), str):
        return to_datetime(value['value'])
    if value.get('__type') == 'Timestamp' and _is_timestamp_like(value.get('value')):
        value = value['value']
    if _is_timestamp_like(value):
        seconds = value['seconds'] + value['nanoseconds'] / 1_000_000_000
        return datetime.fromtimestamp(seconds, tz=dt_timezone.utc)

    return {k: revive(v) for k, v in value.items()}


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce an ISO string, date string or datetime to an aware datetime.
    Naive values are taken in the configured time zone.

    Raises:
        ValueError: if a string cannot be parsed
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is None:
                raise ValueError(f"Invalid date: {value!r}")
            parsed = datetime.combine(day, time.min)
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def to_uuid(value: Any) -> uuid.UUID:
    """Legacy ids are usually UUIDs; anything else maps to a stable UUID."""
    if isinstance(value, uuid.UUID):
        return value
    text = str(value)
    try:
        return uuid.UUID(text)
    except ValueError:
        return uuid.uuid5(LEGACY_NAMESPACE, text)


def to_recurrence_value(value: Any) -> Optional[int]:
    """
    Whole number of recurrence units. Fractional values are truncated
    toward zero the way the browser app added days; anything that is not
    a number decodes to None.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value if value is not None else 0)).quantize(Decimal('0.01'))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")


def map_choice(value: Any, legacy: Dict[str, str], canonical) -> Optional[str]:
    """Map a legacy label or an already-canonical value; None when unknown."""
    if value in legacy:
        return legacy[value]
    if value in canonical:
        return value
    return None


# =============================================================================
# Export loading
# =============================================================================

def parse_export(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize an export into {collection: revived records}.
    Missing collections are empty lists; settings is a dict or None.
    """
    if not isinstance(data, dict):
        raise ValueError("Local storage export must be a JSON object")

    stripped = {}
    for key, value in data.items():
        if key.startswith(STORAGE_PREFIX):
            key = key[len(STORAGE_PREFIX):]
        if isinstance(value, str):
            value = json.loads(value)
        stripped[key] = value

    result: Dict[str, Any] = {}
    for name, keys in COLLECTION_KEYS.items():
        raw = next((stripped[k] for k in keys if k in stripped), None)
        raw = revive(raw)
        if name == 'settings':
            if isinstance(raw, list):
                raw = raw[0] if raw else None
            result[name] = raw or None
        else:
            result[name] = list(raw or [])
    return result


def load_export(path: Path) -> Dict[str, Any]:
    """
    Read and normalize an export file.

    Raises:
        OSError: if the file cannot be read
        ValueError: if it is not a valid export (json.JSONDecodeError included)
    """
    with open(path, encoding='utf-8') as fh:
        data = json.load(fh)
    logger.debug("Loaded local storage export from %s", path)
    return parse_export(data)


# =============================================================================
# Record decoding (read side)
# =============================================================================

def decode_client(raw: Dict[str, Any]) -> ClientDTO:
    status = map_choice(raw.get('status'), CLIENT_STATUS, ClientStatus.values)
    subscriptions = []
    for sub in raw.get('plans') or []:
        activation = sub.get('planActivationDate', sub.get('activation_date'))
        subscriptions.append(SubscriptionDTO(
            plan_id=to_uuid(sub.get('planId', sub.get('plan_id'))),
            activation_date=to_datetime(activation),
        ))
    return ClientDTO(
        id=to_uuid(raw['id']),
        name=raw.get('name', ''),
        status=status or ClientStatus.INACTIVE,
        plans=tuple(subscriptions),
        created_at=to_datetime(raw.get('createdAt')),
    )


def decode_plan(raw: Dict[str, Any]) -> PlanDTO:
    """
    Unknown recurrence periods and non-numeric recurrence values decode to
    None; the renewal check skips such subscriptions. Fractional values
    are truncated.
    """
    plan_type = map_choice(raw.get('type', raw.get('plan_type')), PLAN_TYPE, PlanType.values)
    recurrence_value = raw.get('recurrenceValue', raw.get('recurrence_value'))
    return PlanDTO(
        id=to_uuid(raw['id']),
        name=raw.get('name', ''),
        plan_type=plan_type or PlanType.ONE_TIME,
        recurrence_value=to_recurrence_value(recurrence_value),
        recurrence_period=map_choice(
            raw.get('recurrencePeriod', raw.get('recurrence_period')),
            RECURRENCE_PERIOD,
            RecurrencePeriod.values,
        ),
        price=to_decimal(raw.get('price')),
    )


def decode_invoice(raw: Dict[str, Any]) -> InvoiceDTO:
    status = map_choice(raw.get('status'), INVOICE_STATUS, InvoiceStatus.values)
    return InvoiceDTO(
        id=to_uuid(raw['id']),
        client_id=to_uuid(raw.get('clientId', raw.get('client_id'))),
        plan_id=to_uuid(raw.get('planId', raw.get('plan_id'))),
        due_date=to_datetime(raw.get('dueDate', raw.get('due_date'))),
        status=status or InvoiceStatus.PENDING,
        client_name=raw.get('clientName') or '',
        plan_name=raw.get('planName') or '',
        amount=to_decimal(raw.get('amount')),
        issue_date=to_datetime(raw.get('issueDate', raw.get('issue_date'))),
        payment_date=to_datetime(raw.get('paymentDate', raw.get('payment_date'))),
    )
