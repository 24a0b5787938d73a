"""
System services: database health check and local-storage import.

The import upserts by id, so running it twice over the same export
leaves the database unchanged.
"""
import base64
import binascii
import logging
import mimetypes
from typing import Any, Dict, Optional

from django.core.files.base import ContentFile
from django.db import DatabaseError, connection, transaction
from django.utils import timezone

from apps.clients.models import Client, ClientPlan, ClientStatus
from apps.company.schemas import CompanySettingsIn
from apps.company.services import save_company_settings, save_company_logo
from apps.core.legacy import (
    CLIENT_STATUS, EXPENSE_STATUS, PAYMENT_METHOD,
    decode_invoice, decode_plan, map_choice, parse_export,
    to_datetime, to_decimal, to_uuid,
)
from apps.expenses.models import Expense, ExpenseCategory, ExpenseStatus
from apps.invoices.models import Invoice, PaymentMethod
from apps.plans.models import Plan, PlanType
from .dtos import DatabaseStatusDTO, MigrationResultDTO

logger = logging.getLogger(__name__)


# =============================================================================
# Database status
# =============================================================================

def get_db_status() -> DatabaseStatusDTO:
    """Open the default connection and run a trivial query."""
    try:
        connection.ensure_connection()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.exception("Database connection test failed")
        return DatabaseStatusDTO(success=False, message=f"Connection failed: {e}")

    vendor = connection.vendor
    logger.info("Database connection test succeeded (%s)", vendor)
    return DatabaseStatusDTO(success=True, message=f"Connected to {vendor} database")


# =============================================================================
# Import helpers
# =============================================================================

def _import_categories(records) -> Dict[str, ExpenseCategory]:
    """
    Returns a lookup from legacy id and lowercased name to category.
    Categories whose name already exists are merged into the existing row.
    """
    lookup: Dict[str, ExpenseCategory] = {}
    for raw in records:
        name = (raw.get('name') or '').strip()
        if not name:
            continue
        category = ExpenseCategory.objects.filter(name__iexact=name).first()
        if category is None:
            category = ExpenseCategory.objects.create(id=to_uuid(raw['id']), name=name)
        lookup[str(raw['id'])] = category
        lookup[name.lower()] = category
    return lookup


def _import_plan(raw) -> Plan:
    dto = decode_plan(raw)
    recurring = dto.plan_type == PlanType.RECURRING
    plan, _ = Plan.objects.update_or_create(
        id=dto.id,
        defaults={
            'name': dto.name,
            'description': raw.get('description') or '',
            'price': dto.price,
            'plan_type': dto.plan_type,
            'recurrence_value': dto.recurrence_value if recurring else None,
            'recurrence_period': dto.recurrence_period if recurring else None,
        },
    )
    return plan


def _import_client(raw, known_plan_ids) -> Client:
    status = map_choice(raw.get('status'), CLIENT_STATUS, ClientStatus.values)
    client, _ = Client.objects.update_or_create(
        id=to_uuid(raw['id']),
        defaults={
            'name': raw.get('name') or '',
            'tax_id': raw.get('taxId') or '',
            'contact_name': raw.get('contactName') or '',
            'email': raw.get('email') or '',
            'phone': raw.get('phone') or '',
            'whatsapp': raw.get('whatsapp') or '',
            'notes': raw.get('notes') or '',
            'status': status or ClientStatus.INACTIVE,
        },
    )
    created_at = to_datetime(raw.get('createdAt'))
    if created_at:
        Client.objects.filter(id=client.id).update(created_at=created_at)

    ClientPlan.objects.filter(client=client).delete()
    for position, sub in enumerate(raw.get('plans') or []):
        plan_id = to_uuid(sub.get('planId'))
        activation = to_datetime(sub.get('planActivationDate'))
        if plan_id not in known_plan_ids or activation is None:
            logger.warning("Skipping subscription of client %s to unknown plan %s", client.id, plan_id)
            continue
        ClientPlan.objects.create(
            client=client,
            plan_id=plan_id,
            activation_date=activation,
            position=position,
        )
    return client


def _import_invoice(raw) -> Invoice:
    dto = decode_invoice(raw)
    if dto.due_date is None:
        raise ValueError(f"Invoice {dto.id} has no due date")
    payment_method = map_choice(raw.get('paymentMethod'), PAYMENT_METHOD, PaymentMethod.values)
    invoice, _ = Invoice.objects.update_or_create(
        id=dto.id,
        defaults={
            'client_id': dto.client_id,
            'plan_id': dto.plan_id,
            'client_name': dto.client_name,
            'plan_name': dto.plan_name,
            'amount': dto.amount,
            'issue_date': dto.issue_date or dto.due_date,
            'due_date': dto.due_date,
            'status': dto.status,
            'payment_date': dto.payment_date,
            'payment_method': payment_method,
            'payment_notes': raw.get('paymentNotes') or '',
        },
    )
    return invoice


def _import_expense(raw, categories: Dict[str, ExpenseCategory]) -> Expense:
    category_ref = raw.get('categoryId') or raw.get('category')
    category = None
    if category_ref:
        category = categories.get(str(category_ref)) or categories.get(str(category_ref).strip().lower())
        if category is None:
            name = str(category_ref).strip()
            category, _ = ExpenseCategory.objects.get_or_create(name=name)
            categories[name.lower()] = category

    due = to_datetime(raw.get('dueDate'))
    if due is None:
        raise ValueError(f"Expense {raw.get('id')} has no due date")

    status = map_choice(raw.get('status'), EXPENSE_STATUS, ExpenseStatus.values)
    expense, _ = Expense.objects.update_or_create(
        id=to_uuid(raw['id']),
        defaults={
            'description': raw.get('description') or '',
            'amount': to_decimal(raw.get('amount')),
            'due_date': timezone.localtime(due).date(),
            'status': status or ExpenseStatus.PENDING,
            'category': category,
        },
    )
    return expense


def decode_data_url(data_url: str) -> Optional[ContentFile]:
    """
    Decode a `data:<mime>;base64,<payload>` URL into a named file.
    Returns None for anything else.
    """
    if not data_url or not data_url.startswith('data:') or ',' not in data_url:
        return None
    header, payload = data_url.split(',', 1)
    if not header.endswith(';base64'):
        return None
    mime = header[len('data:'):-len(';base64')]
    ext = mimetypes.guess_extension(mime) or ''
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    return ContentFile(content, name=f"logo{ext}")


def _import_settings(raw) -> None:
    fields = CompanySettingsIn.model_fields.keys()
    save_company_settings(CompanySettingsIn(**{k: raw.get(k) or '' for k in fields}))

    logo = decode_data_url(raw.get('logoDataUrl') or '')
    if logo is not None:
        save_company_logo(logo, logo.name)


# =============================================================================
# Import
# =============================================================================

@transaction.atomic
def migrate_data(data: Dict[str, Any]) -> MigrationResultDTO:
    """
    Import a local-storage export into the database in one transaction.

    Raises:
        ValueError: if the export or any record in it is malformed
    """
    export = parse_export(data)
    try:
        categories = _import_categories(export['expense_categories'])
        plans = [_import_plan(raw) for raw in export['plans']]
        known_plan_ids = set(Plan.objects.values_list('id', flat=True))
        clients = [_import_client(raw, known_plan_ids) for raw in export['clients']]
        invoices = [_import_invoice(raw) for raw in export['invoices']]
        expenses = [_import_expense(raw, categories) for raw in export['expenses']]
        if export['settings']:
            _import_settings(export['settings'])
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed record in export: {e}")

    result = MigrationResultDTO(
        clients=len(clients),
        plans=len(plans),
        invoices=len(invoices),
        expenses=len(expenses),
        categories=len({c.id for c in categories.values()}),
        settings=bool(export['settings']),
    )
    logger.info(result.message)
    return result
