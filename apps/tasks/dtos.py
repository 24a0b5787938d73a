"""DTOs for Tasks app."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID


@dataclass(frozen=True)
class TaskDTO:
    id: UUID
    title: str
    description: str
    due_date: datetime
    status: str
    user_id: Optional[UUID] = None
    related_client_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None


@dataclass
class TaskNode:
    """A task with its subtasks, as assembled by build_task_tree."""
    task: TaskDTO
    children: List['TaskNode'] = field(default_factory=list)

    def __getattr__(self, name):
        # Expose task fields directly so schemas can read node.title etc.
        if name in ('task', 'children'):
            raise AttributeError(name)
        return getattr(self.task, name)
