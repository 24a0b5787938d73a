"""DTOs for Clients app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple
from uuid import UUID


@dataclass(frozen=True)
class SubscriptionDTO:
    """One plan subscription of a client."""
    plan_id: UUID
    activation_date: datetime


@dataclass(frozen=True)
class ClientDTO:
    """Client data as read by the renewal check and invoicing."""
    id: UUID
    name: str
    status: str
    plans: Tuple[SubscriptionDTO, ...] = field(default_factory=tuple)
    created_at: datetime | None = None
