"""
In-memory Skill Registry

Owns the name -> SkillDefinition mapping for one plan resolution pass.
The registry is built once by the caller from already-parsed definitions
and passed to the components that need it; there is no process-wide
instance.

Usage:
    >>> registry = SkillRegistry(definitions)
    >>> skill = registry.lookup("Build Project")
    >>> expand_skill_references(skill.execution, registry.lookup)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from taskplan.core.domain.skill import SkillDefinition
from taskplan.core.interfaces.logging import LoggerProtocol


class SkillRegistry:
    """Name-keyed lookup over a fixed set of skill definitions."""

    def __init__(
        self,
        definitions: Iterable[SkillDefinition] = (),
        logger: LoggerProtocol | None = None,
    ):
        """
        Build the registry.

        Later definitions with a duplicate name replace earlier ones.

        Args:
            definitions: Parsed skill definitions
            logger: Optional logger, defaults to a bound structlog logger
        """
        self.logger = logger or structlog.get_logger().bind(component="skill_registry")
        self._skills: dict[str, SkillDefinition] = {}

        for definition in definitions:
            if definition.name in self._skills:
                self.logger.debug(
                    "skill.override",
                    skill_name=definition.name,
                    previous_key=self._skills[definition.name].key,
                    key=definition.key,
                )
            self._skills[definition.name] = definition

    def lookup(self, name: str) -> SkillDefinition | None:
        """Return the skill named ``name``, or None. Never raises."""
        return self._skills.get(name)

    def has_skill(self, name: str) -> bool:
        return name in self._skills

    def list_skills(self) -> list[str]:
        """Skill names, sorted alphabetically."""
        return sorted(self._skills)

    def invalid_skills(self) -> list[SkillDefinition]:
        """Definitions whose source failed structural validation."""
        return [skill for skill in self._skills.values() if not skill.is_valid]

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillDefinition]:
        return iter(self._skills.values())
