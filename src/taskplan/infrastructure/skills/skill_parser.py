"""
Skill Markdown Parser

Parses skill markdown files organised in header sections:
- Name (optional): display name, defaults to the title-cased file key
- Description (required)
- Aliases (optional): bullet list of example phrasings
- Config (optional): YAML mapping of config paths to value types
- Steps (required): bullet list of human-readable steps
- Execution (required): bullet list of commands or ``[ Skill ]`` references,
  one per step

A structurally incomplete file still yields a SkillDefinition, marked
invalid, so that plans using it can report why it cannot run.
"""

import re
from typing import Any

import yaml

from taskplan.core.domain.skill import (
    MIN_DESCRIPTION_LENGTH,
    ConfigSchema,
    SkillDefinition,
)

_HEADER_PATTERN = re.compile(r"^#{1,6}\s+(.+)$")
_BULLET_PATTERN = re.compile(r"^[-*]\s+(.+)$")

_LIST_SECTIONS = frozenset({"aliases", "steps", "execution"})
_TEXT_SECTIONS = frozenset({"name", "description"})


class SkillParseError(Exception):
    """Raised when a skill section cannot be parsed."""

    pass


def key_to_display_name(key: str) -> str:
    """``deploy-app`` -> ``Deploy App``."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("-"))


def display_name_to_key(name: str) -> str:
    """``Navigate To Product`` -> ``navigate-to-product``."""
    key = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^a-z0-9-]", "", key)


def _extract_bullets(content: str) -> list[str]:
    items: list[str] = []
    for line in content.splitlines():
        match = _BULLET_PATTERN.match(line.strip())
        if match:
            items.append(match.group(1).strip())
    return items


def _parse_config_schema(content: str) -> ConfigSchema | None:
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SkillParseError(f"Invalid YAML in Config section: {e}") from e
    if not isinstance(parsed, dict):
        raise SkillParseError("Config section must be a YAML mapping")
    return parsed


def _extract_sections(content: str) -> dict[str, Any]:
    """
    Split markdown into known sections.

    Returns:
        Dict with any of: name, description (str); aliases, steps,
        execution (list[str]); config (dict)

    Raises:
        SkillParseError: If the Config section is not a YAML mapping
    """
    sections: dict[str, Any] = {}
    current: str | None = None
    buffer: list[str] = []

    def _flush() -> None:
        if current is None:
            return
        text = "\n".join(buffer).strip()
        if not text:
            return
        if current in _TEXT_SECTIONS:
            sections[current] = text
        elif current in _LIST_SECTIONS:
            sections[current] = _extract_bullets(text)
        elif current == "config":
            sections["config"] = _parse_config_schema(text)

    for line in content.splitlines():
        header = _HEADER_PATTERN.match(line)
        if header:
            _flush()
            current = header.group(1).strip().lower()
            buffer = []
        elif current is not None:
            buffer.append(line)
    _flush()

    return sections


def _structure_error(sections: dict[str, Any]) -> str | None:
    if not sections.get("description"):
        return "The skill file is missing a Description section"
    steps = sections.get("steps") or []
    if not steps:
        return "The skill file is missing a Steps section"
    execution = sections.get("execution") or []
    if not execution:
        return "The skill file is missing an Execution section"
    if len(execution) != len(steps):
        return (
            f"The skill has {len(steps)} steps but {len(execution)} execution lines"
        )
    return None


def validate_skill_structure(content: str) -> str | None:
    """
    Check a skill file without building a definition.

    Returns:
        Error message, or None if the structure is valid
    """
    try:
        return _structure_error(_extract_sections(content))
    except SkillParseError as e:
        return str(e)


def parse_skill_markdown(key: str, content: str) -> SkillDefinition:
    """
    Parse skill markdown into a SkillDefinition.

    Args:
        key: File-derived identifier, e.g. ``build-project``
        content: Markdown file content

    Returns:
        SkillDefinition; ``is_valid`` is False with ``validation_error``
        set when required sections are missing or malformed
    """
    try:
        sections = _extract_sections(content)
        error = _structure_error(sections)
    except SkillParseError as e:
        sections = {}
        error = str(e)

    name = sections.get("name") or key_to_display_name(key)
    description = sections.get("description", "")

    if error:
        return SkillDefinition(
            name=name,
            key=key,
            description=description,
            steps=sections.get("steps", []),
            execution=sections.get("execution", []),
            is_valid=False,
            validation_error=error,
            is_incomplete=True,
        )

    return SkillDefinition(
        name=name,
        key=key,
        description=description,
        steps=sections["steps"],
        execution=sections["execution"],
        aliases=sections.get("aliases", []),
        config=sections.get("config"),
        is_incomplete=len(description.strip()) < MIN_DESCRIPTION_LENGTH,
    )
