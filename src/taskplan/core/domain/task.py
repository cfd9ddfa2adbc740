"""
Task Domain Models

Pydantic models for the task tree produced by the planning LLM.

A plan is a list of ScheduledTask nodes. Leaf tasks describe one unit of
work; group tasks own an ordered list of subtasks. Models are frozen so a
validated tree can be shared read-only by expansion and resolution.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskplan.core.domain.enums import Origin, TaskType


class Task(BaseModel):
    """A single planned task."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    action: str = Field(..., min_length=1, description="Human-readable action text")
    type: TaskType = Field(..., description="Kind of task")
    params: Optional[dict[str, Any]] = Field(
        None,
        description="Free-form parameters, e.g. {'skill': 'Build Project'}",
    )
    config: Optional[list[str]] = Field(
        None,
        description="Config paths the task asks the user to provide",
    )

    @field_validator("params", "config", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but must not be null")
        return value

    @property
    def skill_name(self) -> str | None:
        """Name of the skill this task was planned from, if any."""
        if not self.params:
            return None
        skill = self.params.get("skill")
        return skill if isinstance(skill, str) else None


class ScheduledTask(Task):
    """A task that may group an ordered list of subtasks."""

    subtasks: Optional[list[ScheduledTask]] = Field(
        None,
        description="Ordered subtasks; present on group tasks",
    )

    @field_validator("subtasks", mode="before")
    @classmethod
    def _reject_null_subtasks(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but must not be null")
        return value


ScheduledTask.model_rebuild()


class Capability(BaseModel):
    """A capability reported by introspection. Passed through untouched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    origin: Origin
    is_incomplete: Optional[bool] = Field(None, alias="isIncomplete", strict=True)
