"""
Plan Resolver

Turns an untrusted plan payload into an execution-ready report:

    raw payload -> schema validation -> leaf traversal
                -> skill expansion -> requirement resolution -> PlanReport

The resolver never executes anything. Failures are returned as ``Err``
values carrying a classified TaskplanError.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from taskplan.application.requirement_resolver import ConfigRequirementResolver
from taskplan.core.domain.errors import Err, Ok, Result, TaskplanError
from taskplan.core.domain.schemas import (
    parse_plan_json,
    validate_command_result,
    validate_scheduled_task,
    validate_task_tree,
)
from taskplan.core.domain.skill import ConfigRequirement, SkillIssue
from taskplan.core.domain.skill_expander import (
    expand_skill,
    expand_skill_references,
    get_referenced_skills,
)
from taskplan.core.domain.skill_registry import SkillRegistry
from taskplan.core.domain.task import ScheduledTask
from taskplan.core.domain.task_tree import iter_leaf_tasks


@dataclass
class PlanReport:
    """Flattened plan plus everything still blocking its execution."""

    tasks: list[ScheduledTask] = field(default_factory=list)
    expanded_lines: list[str] = field(default_factory=list)
    missing_config: list[ConfigRequirement] = field(default_factory=list)
    validation_errors: list[SkillIssue] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return not self.missing_config and not self.validation_errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "expanded_lines": list(self.expanded_lines),
            "missing_config": [req.to_dict() for req in self.missing_config],
            "validation_errors": [issue.to_dict() for issue in self.validation_errors],
        }


class PlanResolver:
    """Validates, expands and checks one plan against skills and config."""

    def __init__(self, registry: SkillRegistry, config: Mapping[str, Any] | None = None):
        self.registry = registry
        self.requirements = ConfigRequirementResolver(registry.lookup, config or {})
        self.logger = structlog.get_logger().bind(component="plan_resolver")

    def _validate(self, payload: Any) -> Result[list[ScheduledTask]]:
        if isinstance(payload, list):
            return validate_task_tree(payload)
        if isinstance(payload, dict) and "tasks" in payload:
            result = validate_command_result(payload)
            return Ok(list(result.value.tasks)) if result.ok else result
        result = validate_scheduled_task(payload)
        return Ok([result.value]) if result.ok else result

    def expand_task(self, task: ScheduledTask) -> list[str]:
        """Execution lines of one leaf task."""
        skill_name = task.skill_name
        if skill_name and self.registry.has_skill(skill_name):
            return expand_skill(skill_name, self.registry.lookup)
        return expand_skill_references([task.action], self.registry.lookup)

    def referenced_skills(self, tasks: list[ScheduledTask]) -> set[str]:
        """Every skill reachable from the plan, for surfacing documentation."""
        names: set[str] = set()
        for task in iter_leaf_tasks(tasks):
            skill_name = task.skill_name
            if skill_name:
                names.add(skill_name)
                skill = self.registry.lookup(skill_name)
                if skill is not None:
                    names |= get_referenced_skills(
                        skill.execution, self.registry.lookup, (skill_name,)
                    )
            else:
                names |= get_referenced_skills([task.action], self.registry.lookup)
        return names

    def resolve(self, payload: Any) -> Result[PlanReport]:
        """
        Resolve a deserialized plan payload.

        Args:
            payload: A list of tasks, a single task, or a full command
                result with a ``tasks`` field

        Returns:
            Ok(PlanReport), or Err with INVALID_INPUT, SKILL_NOT_FOUND,
            CIRCULAR_REFERENCE or INVALID_STATE
        """
        validated = self._validate(payload)
        if not validated.ok:
            self.logger.warning("plan.invalid", error=str(validated.error))
            return validated

        tasks = validated.value
        leaves = list(iter_leaf_tasks(tasks))

        try:
            lines: list[str] = []
            for task in leaves:
                lines.extend(self.expand_task(task))
            report = self.requirements.resolve(leaves)
        except TaskplanError as e:
            self.logger.warning("plan.expansion_failed", code=e.code.value, error=str(e))
            return Err(e)

        self.logger.info(
            "plan.resolved",
            leaf_count=len(leaves),
            line_count=len(lines),
            missing_count=len(report.missing_config),
        )
        return Ok(
            PlanReport(
                tasks=tasks,
                expanded_lines=lines,
                missing_config=report.missing_config,
                validation_errors=report.validation_errors,
            )
        )

    def resolve_text(self, text: str) -> Result[PlanReport]:
        """Resolve a plan given as raw JSON text."""
        parsed = parse_plan_json(text)
        if not parsed.ok:
            return parsed
        return self.resolve(parsed.value)
