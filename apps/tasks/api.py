"""
Tasks API endpoints.
"""
from typing import List
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import TaskIn, TaskUpdate, TaskOut, TaskNodeOut
from . import services

router = Router(tags=["Tasks"])


@router.get("", response=List[TaskOut], auth=None)
def get_tasks(request: HttpRequest):
    """All tasks, flat, ordered by due date."""
    require_auth(request)
    return services.list_tasks()


@router.get("/tree", response=List[TaskNodeOut], auth=None)
def get_task_tree(request: HttpRequest):
    """Tasks nested under their parents."""
    require_auth(request)
    return services.get_task_tree()


@router.get("/{task_id}", response=TaskOut, auth=None)
def get_task_detail(request: HttpRequest, task_id: UUID):
    require_auth(request)
    task = services.get_task(task_id)
    if not task:
        raise HttpError(404, "Task not found")
    return task


@router.post("", response=TaskOut, auth=None)
def create_task_api(request: HttpRequest, payload: TaskIn):
    user = require_auth(request)
    if payload.user_id is None:
        payload.user_id = user.id
    try:
        return services.create_task(payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.put("/{task_id}", response=TaskOut, auth=None)
def update_task_api(request: HttpRequest, task_id: UUID, payload: TaskUpdate):
    require_auth(request)
    try:
        task = services.update_task(task_id, payload)
    except ValueError as e:
        raise HttpError(400, str(e))
    if not task:
        raise HttpError(404, "Task not found")
    return task


@router.delete("/{task_id}", response={204: None}, auth=None)
def delete_task_api(request: HttpRequest, task_id: UUID):
    """Delete a task and its subtasks."""
    require_auth(request)
    if not services.delete_task(task_id):
        raise HttpError(404, "Task not found")
    return 204, None
