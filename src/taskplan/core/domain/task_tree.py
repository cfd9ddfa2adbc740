"""Task tree classification and traversal helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from taskplan.core.domain.enums import TaskType
from taskplan.core.domain.task import ScheduledTask, Task


def is_group(task: Task) -> bool:
    """True if the task owns subtasks or is declared as a group."""
    return getattr(task, "subtasks", None) is not None or task.type == TaskType.GROUP


def is_task(value: Any) -> bool:
    """Structural guard: does a raw value satisfy the Task schema?"""
    if isinstance(value, Task):
        return True
    try:
        Task.model_validate(value)
    except PydanticValidationError:
        return False
    return True


def iter_leaf_tasks(tasks: Iterable[ScheduledTask]) -> Iterator[ScheduledTask]:
    """
    Yield leaf tasks depth-first, left to right.

    Groups are never yielded themselves; an empty group contributes nothing.
    """
    stack: list[ScheduledTask] = list(reversed(list(tasks)))
    while stack:
        task = stack.pop()
        if is_group(task):
            stack.extend(reversed(task.subtasks or []))
            continue
        yield task
