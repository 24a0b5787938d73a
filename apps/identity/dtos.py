"""DTOs for Identity app."""
from dataclasses import dataclass
from uuid import UUID
from typing import Optional

from ninja import Schema


@dataclass(frozen=True)
class UserDTO:
    id: UUID
    name: str
    email: str


class AdminCreate(Schema):
    name: str
    email: str
    password: str


class AdminUpdate(Schema):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
