"""
Skill Protocol Interfaces

Defines the lookup contract used by the expander and the requirement
resolver. Any callable mapping a skill name to a SkillDefinition (or None)
satisfies it, including ``SkillRegistry.lookup`` and plain dict ``get``.
"""

from typing import Protocol

from taskplan.core.domain.skill import SkillDefinition


class SkillLookup(Protocol):
    """Callable resolving a skill name to its definition."""

    def __call__(self, name: str) -> SkillDefinition | None:
        """
        Resolve a skill by display name.

        Args:
            name: Skill name as written inside a ``[ Name ]`` reference

        Returns:
            The definition, or None if no such skill exists. Never raises.
        """
        ...
