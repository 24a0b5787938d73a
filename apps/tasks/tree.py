"""
Task hierarchy assembly.
"""
from typing import Dict, Iterable, List
from uuid import UUID

from .dtos import TaskDTO, TaskNode


def build_task_tree(tasks: Iterable[TaskDTO]) -> List[TaskNode]:
    """
    Assemble a flat task list into a forest.

    Tasks without a parent, or whose parent is not in the list, become
    roots. Roots and children keep the order of the input.
    """
    tasks = list(tasks)
    nodes: Dict[UUID, TaskNode] = {t.id: TaskNode(task=t) for t in tasks}

    roots: List[TaskNode] = []
    for task in tasks:
        node = nodes[task.id]
        parent = nodes.get(task.parent_id) if task.parent_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots
