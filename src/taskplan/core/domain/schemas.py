"""
Plan Schema Validation

Validates untrusted LLM output against the task tree schema.

Validation is all-or-nothing: a single malformed node anywhere in the tree
rejects the whole payload. Failures are returned as ``Err`` values carrying
an InvalidInputError so callers can branch on the error code instead of
catching pydantic exceptions.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskplan.core.domain.errors import Err, InvalidInputError, Ok, ParseError, Result
from taskplan.core.domain.task import Capability, ScheduledTask

# Deepest subtask nesting accepted from a payload
MAX_TASK_DEPTH = 64


class ExecuteCommand(BaseModel):
    """A shell command the execution collaborator may run."""

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1)
    command: str = Field(..., min_length=1)
    workdir: Optional[str] = None
    timeout: Optional[int] = Field(None, gt=0, strict=True)
    critical: Optional[bool] = Field(None, strict=True)


class CommandResult(BaseModel):
    """LLM response from the schedule, execute and answer tools."""

    model_config = ConfigDict(frozen=True)

    message: str
    summary: Optional[str] = None
    tasks: list[ScheduledTask]
    answer: Optional[str] = None
    commands: Optional[list[ExecuteCommand]] = None


class IntrospectResult(BaseModel):
    """LLM response from the introspect tool."""

    model_config = ConfigDict(frozen=True)

    message: str
    capabilities: list[Capability]


_TASK_LIST_ADAPTER = TypeAdapter(list[ScheduledTask])


def _format_location(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts) or "<root>"


def _first_violation(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    return f"{_format_location(tuple(first.get('loc', ())))}: {first.get('msg', 'invalid value')}"


def _nesting_depth(payload: Any) -> int:
    """Deepest subtask nesting in a raw payload, computed without recursion."""
    deepest = 0
    stack: list[tuple[Any, int]] = [(payload, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, list):
            stack.extend((item, depth) for item in node)
            continue
        if not isinstance(node, dict):
            continue
        deepest = max(deepest, depth)
        if deepest > MAX_TASK_DEPTH:
            return deepest
        subtasks = node.get("subtasks")
        if isinstance(subtasks, list):
            stack.extend((item, depth + 1) for item in subtasks)
    return deepest


def _check_depth(payload: Any) -> Err | None:
    depth = _nesting_depth(payload)
    if depth > MAX_TASK_DEPTH:
        return Err(
            InvalidInputError(
                f"Task tree exceeds the maximum nesting depth of {MAX_TASK_DEPTH}",
                details={"max_depth": MAX_TASK_DEPTH},
            )
        )
    return None


def _invalid(error: PydanticValidationError, what: str) -> Err:
    return Err(
        InvalidInputError(
            f"Invalid {what}: {_first_violation(error)}",
            cause=error,
            details={"error_count": error.error_count()},
        )
    )


def validate_scheduled_task(payload: Any) -> Result[ScheduledTask]:
    """
    Validate a single task tree.

    Args:
        payload: Untyped value, e.g. deserialized JSON

    Returns:
        Ok(ScheduledTask) or Err(InvalidInputError) naming the first violation
    """
    too_deep = _check_depth(payload)
    if too_deep:
        return too_deep
    try:
        return Ok(ScheduledTask.model_validate(payload))
    except PydanticValidationError as e:
        return _invalid(e, "task")


def validate_task_tree(payload: Any) -> Result[list[ScheduledTask]]:
    """Validate a list of task trees (the ``tasks`` field of a plan)."""
    if not isinstance(payload, list):
        return Err(InvalidInputError("Invalid plan: tasks must be a list"))
    too_deep = _check_depth(payload)
    if too_deep:
        return too_deep
    try:
        return Ok(_TASK_LIST_ADAPTER.validate_python(payload))
    except PydanticValidationError as e:
        return _invalid(e, "plan")


def validate_command_result(payload: Any) -> Result[CommandResult]:
    """Validate a full schedule/execute/answer response."""
    too_deep = _check_depth(payload.get("tasks") if isinstance(payload, dict) else None)
    if too_deep:
        return too_deep
    try:
        return Ok(CommandResult.model_validate(payload))
    except PydanticValidationError as e:
        return _invalid(e, "command result")


def validate_introspect_result(payload: Any) -> Result[IntrospectResult]:
    """Validate an introspection response."""
    try:
        return Ok(IntrospectResult.model_validate(payload))
    except PydanticValidationError as e:
        return _invalid(e, "introspect result")


def parse_plan_json(text: str) -> Result[Any]:
    """Decode raw JSON text, wrapping decode failures as ParseError."""
    try:
        return Ok(json.loads(text))
    except json.JSONDecodeError as e:
        return Err(ParseError(f"Plan is not valid JSON: {e.msg}", cause=e))
