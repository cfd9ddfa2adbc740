"""
Skill Domain Models

A skill is a named, reusable sequence of execution lines. Lines are either
literal instructions or skill references of the form ``[ Skill Name ]``
(with mandatory spaces inside the brackets), which the expander replaces
with the referenced skill's own lines.

Skills may also declare a nested config schema whose leaves name the value
type (``string``, ``boolean``, ``number``) expected at that path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from taskplan.core.domain.enums import ConfigValueType

# Descriptions shorter than this mark the skill as needing more documentation
MIN_DESCRIPTION_LENGTH = 20

ConfigSchema = dict[str, Any]


@dataclass(frozen=True)
class SkillDefinition:
    """
    Parsed skill definition.

    Attributes:
        name: Display name, the unique lookup key for references
        execution: Ordered execution lines (literals or references)
        key: File-derived identifier (kebab-case), if known
        description: What the skill does
        steps: Human-readable steps, parallel to execution
        aliases: Example phrasings that should match this skill
        config: Nested config schema
        is_valid: False when the source file was structurally incomplete
        validation_error: Why the skill is invalid
        is_incomplete: True for invalid or under-documented skills
    """

    name: str
    execution: tuple[str, ...] = ()
    key: str | None = None
    description: str = ""
    steps: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    # dict is unhashable, so it does not take part in hash/compare
    config: ConfigSchema | None = field(default=None, hash=False, compare=False)
    is_valid: bool = True
    validation_error: str | None = None
    is_incomplete: bool = False

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the record immutable
        object.__setattr__(self, "execution", tuple(self.execution))
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "aliases", tuple(self.aliases))


@dataclass(frozen=True, eq=False)
class ConfigRequirement:
    """A configuration value the plan needs but the user has not provided."""

    path: str
    type: str = ConfigValueType.STRING.value
    description: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigRequirement):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"path": self.path, "type": self.type}
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class SkillIssue:
    """Validation problems of one skill used by the plan."""

    skill: str
    issues: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"skill": self.skill, "issues": list(self.issues)}


def generate_config_paths(schema: ConfigSchema, prefix: str = "") -> list[str]:
    """All leaf paths declared by a nested config schema, in order."""
    paths: list[str] = []
    for key, value in schema.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, str):
            paths.append(full_key)
        elif isinstance(value, dict):
            paths.extend(generate_config_paths(value, full_key))
    return paths


def get_config_type(schema: ConfigSchema, path: str) -> str | None:
    """
    Declared value type for ``path`` in a config schema.

    Returns:
        "string", "boolean" or "number", or None when the path is not a
        typed leaf of the schema
    """
    current: Any = schema
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)

    if isinstance(current, str) and current in {kind.value for kind in ConfigValueType}:
        return current
    return None
