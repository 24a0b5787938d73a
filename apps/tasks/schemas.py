"""
API Schemas for Tasks app.
"""
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema

from .models import TaskStatus


class TaskIn(Schema):
    title: str
    description: str = ""
    due_date: datetime
    status: str = TaskStatus.PENDING
    user_id: Optional[UUID] = None
    related_client_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None


class TaskUpdate(Schema):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None
    user_id: Optional[UUID] = None
    related_client_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None


class TaskOut(Schema):
    id: UUID
    title: str
    description: str
    due_date: datetime
    status: str
    user_id: Optional[UUID] = None
    related_client_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None


class TaskNodeOut(TaskOut):
    children: List['TaskNodeOut'] = []


TaskNodeOut.model_rebuild()
