"""
Client services.

Clients own their plan subscriptions (ClientPlan). Deleting a client also
deletes its invoices.
"""
import logging
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction

from apps.plans.services import get_plan_dto
from .models import Client, ClientPlan, ClientStatus
from .dtos import ClientDTO, SubscriptionDTO
from .schemas import ClientIn, ClientUpdate, SubscriptionSchema

logger = logging.getLogger(__name__)


# =============================================================================
# Cross-app reads
# =============================================================================

def to_client_dto(client: Client) -> ClientDTO:
    return ClientDTO(
        id=client.id,
        name=client.name,
        status=client.status,
        plans=tuple(
            SubscriptionDTO(plan_id=sub.plan_id, activation_date=sub.activation_date)
            for sub in client.plans.all()
        ),
        created_at=client.created_at,
    )


def get_client_dto(client_id: UUID) -> Optional[ClientDTO]:
    """
    Get a Client as a DTO for cross-app communication.
    Used by invoices to denormalize the client name.
    """
    try:
        return to_client_dto(Client.objects.prefetch_related('plans').get(id=client_id))
    except Client.DoesNotExist:
        return None


def list_client_dtos() -> List[ClientDTO]:
    return [to_client_dto(c) for c in Client.objects.prefetch_related('plans')]


# =============================================================================
# CRUD
# =============================================================================

def _validate(client: Client) -> None:
    if not (client.name or '').strip():
        raise ValueError("Client name is required")
    if client.status not in ClientStatus.values:
        raise ValueError(f"Unknown client status: {client.status}")


def _replace_subscriptions(client: Client, subscriptions: Iterable[SubscriptionSchema]) -> None:
    """
    Replace every subscription of the client, keeping the given order.

    Raises:
        ValueError: if a subscription refers to an unknown plan
    """
    rows = []
    for position, sub in enumerate(subscriptions):
        if get_plan_dto(sub.plan_id) is None:
            raise ValueError(f"Plan {sub.plan_id} does not exist")
        rows.append(ClientPlan(
            client=client,
            plan_id=sub.plan_id,
            activation_date=sub.activation_date,
            position=position,
        ))
    ClientPlan.objects.filter(client=client).delete()
    ClientPlan.objects.bulk_create(rows)


def list_clients() -> List[Client]:
    """All clients, newest first."""
    return list(Client.objects.prefetch_related('plans'))


def get_client(client_id: UUID) -> Optional[Client]:
    try:
        return Client.objects.prefetch_related('plans').get(id=client_id)
    except Client.DoesNotExist:
        return None


@transaction.atomic
def create_client(payload: ClientIn) -> Client:
    data = payload.dict()
    subscriptions = payload.plans
    data.pop('plans')

    client = Client(**data)
    _validate(client)
    client.save()
    _replace_subscriptions(client, subscriptions)

    logger.info("Created client %s with %d plan(s)", client.id, len(subscriptions))
    return get_client(client.id)


@transaction.atomic
def update_client(client_id: UUID, payload: ClientUpdate) -> Optional[Client]:
    """
    Partial update. When `plans` is given it replaces all subscriptions.
    """
    client = get_client(client_id)
    if client is None:
        return None

    data = payload.dict(exclude_unset=True)
    data.pop('plans', None)
    for attr, value in data.items():
        if value is not None:
            setattr(client, attr, value)
    _validate(client)
    client.save()

    if payload.plans is not None:
        _replace_subscriptions(client, payload.plans)

    logger.info("Updated client %s", client.id)
    return get_client(client.id)


@transaction.atomic
def delete_client(client_id: UUID) -> bool:
    """Delete a client, its subscriptions and its invoices."""
    from apps.invoices.services import delete_invoices_for_client

    deleted, _ = Client.objects.filter(id=client_id).delete()
    if not deleted:
        return False

    removed = delete_invoices_for_client(client_id)
    logger.info("Deleted client %s and %d invoice(s)", client_id, removed)
    return True
