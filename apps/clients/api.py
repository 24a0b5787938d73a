"""
Clients API endpoints.
"""
from typing import List
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import ClientIn, ClientUpdate, ClientOut
from .services import list_clients, get_client, create_client, update_client, delete_client

router = Router(tags=["Clients"])


@router.get("", response=List[ClientOut], auth=None)
def get_clients(request: HttpRequest):
    """List all clients, newest first."""
    require_auth(request)
    return list_clients()


@router.get("/{client_id}", response=ClientOut, auth=None)
def get_client_detail(request: HttpRequest, client_id: UUID):
    require_auth(request)
    client = get_client(client_id)
    if not client:
        raise HttpError(404, "Client not found")
    return client


@router.post("", response=ClientOut, auth=None)
def create_client_api(request: HttpRequest, payload: ClientIn):
    require_auth(request)
    try:
        return create_client(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/{client_id}", response=ClientOut, auth=None)
def update_client_api(request: HttpRequest, client_id: UUID, payload: ClientUpdate):
    """
    Update a client. Sending `plans` replaces all of its subscriptions.
    """
    require_auth(request)
    try:
        client = update_client(client_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not client:
        raise HttpError(404, "Client not found")
    return client


@router.delete("/{client_id}", response={204: None}, auth=None)
def delete_client_api(request: HttpRequest, client_id: UUID):
    """Delete a client together with its invoices."""
    require_auth(request)
    if not delete_client(client_id):
        raise HttpError(404, "Client not found")
    return 204, None
