"""
Configuration Requirement Resolver

Scans task actions and expanded skill commands for ``{dot.path}``
placeholders and reports the paths missing from the user's configuration.

Each path is reported at most once per pass. Tasks naming a skill that is
not registered contribute nothing beyond their own action text.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from taskplan.core.domain.config_utils import flatten_config, has_config_path
from taskplan.core.domain.enums import ConfigValueType
from taskplan.core.domain.placeholders import (
    extract_placeholders,
    path_to_string,
    resolve_variant,
)
from taskplan.core.domain.skill import (
    ConfigRequirement,
    SkillDefinition,
    SkillIssue,
    get_config_type,
)
from taskplan.core.domain.skill_expander import expand_skill_references
from taskplan.core.domain.task import Task
from taskplan.core.interfaces.skills import SkillLookup

logger = structlog.get_logger(__name__)

# Params that never carry the variant name
_NON_VARIANT_PARAMS = frozenset({"skill", "type"})


@dataclass
class RequirementReport:
    """Outcome of one resolution pass."""

    missing_config: list[ConfigRequirement] = field(default_factory=list)
    validation_errors: list[SkillIssue] = field(default_factory=list)

    @property
    def is_satisfied(self) -> bool:
        return not self.missing_config and not self.validation_errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "missing_config": [req.to_dict() for req in self.missing_config],
            "validation_errors": [issue.to_dict() for issue in self.validation_errors],
        }


def get_task_variant(task: Task) -> str | None:
    """
    Variant name a skill task was planned for.

    ``params.variant`` wins; otherwise the first other string param
    (e.g. ``product`` or ``target``) is used. Lower-cased.
    """
    params = task.params or {}
    variant = params.get("variant")
    if isinstance(variant, str):
        return variant.lower()
    for key, value in params.items():
        if key not in _NON_VARIANT_PARAMS and isinstance(value, str):
            return value.lower()
    return None


class ConfigRequirementResolver:
    """Cross-references placeholders against a configuration map."""

    def __init__(self, skill_lookup: SkillLookup, config: Mapping[str, Any]):
        """
        Args:
            skill_lookup: Resolves skill names, e.g. ``SkillRegistry.lookup``
            config: Nested user configuration (dot-keyed entries also work)
        """
        self._lookup = skill_lookup
        self._flat_config = flatten_config(config)

    def is_configured(self, path: str) -> bool:
        """Only string, boolean or number values satisfy a placeholder."""
        return has_config_path(self._flat_config, path)

    def collect_skill_issues(self, tasks: Iterable[Task]) -> list[SkillIssue]:
        """One issue entry per distinct invalid skill referenced by tasks."""
        issues: list[SkillIssue] = []
        seen: set[str] = set()
        for task in tasks:
            skill_name = task.skill_name
            if not skill_name or skill_name in seen:
                continue
            seen.add(skill_name)
            skill = self._lookup(skill_name)
            if skill is not None and not skill.is_valid:
                issues.append(
                    SkillIssue(
                        skill=skill.name,
                        issues=(skill.validation_error or "Unknown validation error",),
                    )
                )
        return issues

    def resolve(self, tasks: Iterable[Task]) -> RequirementReport:
        """
        Find configuration the tasks need but the user has not provided.

        If any referenced skill is invalid, only the validation errors are
        reported and ``missing_config`` stays empty.

        Raises:
            CircularReferenceError: A referenced skill expands into a cycle
            SkillNotFoundError: A skill's execution references a missing skill
        """
        tasks = list(tasks)
        issues = self.collect_skill_issues(tasks)
        if issues:
            logger.info("requirements.invalid_skills", skills=[i.skill for i in issues])
            return RequirementReport(validation_errors=issues)

        missing: list[ConfigRequirement] = []
        seen_paths: set[str] = set()

        def _check(path: str, skill: SkillDefinition | None = None) -> None:
            if path in seen_paths:
                return
            seen_paths.add(path)
            if self.is_configured(path):
                return
            config_type = get_config_type(skill.config, path) if skill and skill.config else None
            missing.append(
                ConfigRequirement(path=path, type=config_type or ConfigValueType.STRING.value)
            )

        for task in tasks:
            skill_name = task.skill_name
            skill = self._lookup(skill_name) if skill_name else None

            if skill is None:
                if skill_name:
                    logger.debug("requirements.unknown_skill", skill_name=skill_name)
                for placeholder in extract_placeholders(task.action):
                    # Variants are resolved during planning for plain tasks
                    if not placeholder.has_variant:
                        _check(placeholder.dotted)
                continue

            variant = get_task_variant(task)
            for line in expand_skill_references(skill.execution, self._lookup, (skill.name,)):
                for placeholder in extract_placeholders(line):
                    if not placeholder.has_variant:
                        _check(placeholder.dotted, skill)
                    elif variant:
                        _check(path_to_string(resolve_variant(placeholder.path, variant)), skill)

        if missing:
            logger.info("requirements.missing_config", paths=[req.path for req in missing])
        return RequirementReport(missing_config=missing)
