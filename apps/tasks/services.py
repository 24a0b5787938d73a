"""
Task services.

Tasks form a hierarchy through `parent`. Deleting a task deletes its
subtasks.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from uuid import UUID

from django.utils import timezone

from .models import Task, TaskStatus
from .dtos import TaskDTO, TaskNode
from .schemas import TaskIn, TaskUpdate
from .tree import build_task_tree

logger = logging.getLogger(__name__)


def to_task_dto(task: Task) -> TaskDTO:
    return TaskDTO(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        status=task.status,
        user_id=task.user_id,
        related_client_id=task.related_client_id,
        parent_id=task.parent_id,
    )


def _validate(task: Task) -> None:
    """
    Raises:
        ValueError: on blank title, unknown status, missing parent, or a
            parent chain that would loop back to the task
    """
    if not (task.title or '').strip():
        raise ValueError("Title is required")
    if task.status not in TaskStatus.values:
        raise ValueError(f"Unknown task status: {task.status}")
    if not task.parent_id:
        return

    ancestor_id = task.parent_id
    seen = set()
    while ancestor_id:
        if ancestor_id == task.id:
            raise ValueError("A task cannot be its own ancestor")
        if ancestor_id in seen:
            break
        seen.add(ancestor_id)
        ancestor = Task.objects.filter(id=ancestor_id).values('parent_id').first()
        if ancestor is None:
            if ancestor_id == task.parent_id:
                raise ValueError(f"Parent task {task.parent_id} does not exist")
            break
        ancestor_id = ancestor['parent_id']


def list_tasks() -> List[Task]:
    """All tasks, flat, due date ascending."""
    return list(Task.objects.all())


def get_task_tree() -> List[TaskNode]:
    return build_task_tree(to_task_dto(t) for t in Task.objects.all())


def get_task(task_id: UUID) -> Optional[Task]:
    try:
        return Task.objects.get(id=task_id)
    except Task.DoesNotExist:
        return None


def create_task(payload: TaskIn) -> Task:
    task = Task(**payload.dict())
    _validate(task)
    task.save()
    logger.info("Created task %s", task.id)
    return task


def update_task(task_id: UUID, payload: TaskUpdate) -> Optional[Task]:
    task = get_task(task_id)
    if task is None:
        return None

    for attr, value in payload.dict(exclude_unset=True).items():
        setattr(task, attr, value)
    _validate(task)
    task.save()
    logger.info("Updated task %s", task.id)
    return task


def delete_task(task_id: UUID) -> bool:
    """Delete a task and, through the parent relation, all its subtasks."""
    deleted, _ = Task.objects.filter(id=task_id).delete()
    if deleted:
        logger.info("Deleted task %s (%d row(s) including subtasks)", task_id, deleted)
    return bool(deleted)


def get_notification_tasks(today: Optional[date] = None) -> List[TaskDTO]:
    """
    Tasks that need attention: not DONE and due today or earlier
    (calendar day in the configured time zone).
    """
    today = today or timezone.localdate()
    end_of_today = timezone.make_aware(datetime.combine(today + timedelta(days=1), time.min))
    tasks = Task.objects.exclude(status=TaskStatus.DONE).filter(due_date__lt=end_of_today)
    return [to_task_dto(t) for t in tasks]
