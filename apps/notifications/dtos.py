"""DTOs for Notifications app."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID


@dataclass(frozen=True)
class RenewalAlertDTO:
    """A recurring subscription whose next invoice is due soon."""
    client_id: UUID
    client_name: str
    plan_id: UUID
    plan_name: str
    next_due_date: datetime


@dataclass(frozen=True)
class RenewalCheckResult:
    """
    Outcome of a renewal check.
    `alerts` is empty both when nothing is due and when reading failed;
    `error` tells the two apart.
    """
    alerts: List[RenewalAlertDTO] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
