"""
Skill Reference Expansion

Recursively replaces ``[ Skill Name ]`` lines with the referenced skill's
own execution lines until only literal instructions remain.

Cycle detection tracks only the ancestor chain of the current branch: each
recursive call receives a fresh, extended copy of the chain, so two sibling
references to the same skill both expand while a skill that (transitively)
contains itself is reported.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from taskplan.core.domain.enums import ErrorCode
from taskplan.core.domain.errors import (
    CircularReferenceError,
    Err,
    InvalidStateError,
    Ok,
    Result,
    SkillNotFoundError,
    TaskplanError,
)
from taskplan.core.interfaces.skills import SkillLookup

# Longest chain of distinct nested skills that will be followed
MAX_EXPANSION_DEPTH = 32

# "[", whitespace, name, whitespace, "]"; "[Name]" is ordinary text
SKILL_REFERENCE_PATTERN = re.compile(r"^\[\s+(.+?)\s+\]$")


def parse_skill_reference(line: str) -> str | None:
    """
    Extract the referenced skill name from an execution line.

    Example:
        >>> parse_skill_reference("[ Build Alpha ]")
        'Build Alpha'
        >>> parse_skill_reference("[Build Alpha]") is None
        True
    """
    match = SKILL_REFERENCE_PATTERN.match(line.strip())
    return match.group(1) if match else None


def is_skill_reference(line: str) -> bool:
    return SKILL_REFERENCE_PATTERN.match(line.strip()) is not None


def _ordered(visited: Iterable[str]) -> tuple[str, ...]:
    chain: list[str] = []
    for name in visited:
        if name not in chain:
            chain.append(name)
    return tuple(chain)


def _expand(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    chain: tuple[str, ...],
) -> list[str]:
    if len(chain) > MAX_EXPANSION_DEPTH:
        raise InvalidStateError(
            f"Skill references are nested deeper than {MAX_EXPANSION_DEPTH} levels",
            details={"chain": list(chain)},
        )

    visited = frozenset(chain)
    expanded: list[str] = []

    for line in execution:
        skill_name = parse_skill_reference(line)

        if skill_name is None:
            expanded.append(line)
            continue

        if skill_name in visited:
            raise CircularReferenceError([*chain, skill_name])

        skill = skill_lookup(skill_name)
        if skill is None:
            raise SkillNotFoundError(skill_name)

        expanded.extend(_expand(skill.execution, skill_lookup, (*chain, skill_name)))

    return expanded


def expand_skill_references(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    visited: Iterable[str] = (),
) -> list[str]:
    """
    Expand skill references in execution lines.

    Args:
        execution: Lines to expand, in order
        skill_lookup: Resolves a skill name to its definition
        visited: Skill names already on the ancestor chain, outermost first

    Returns:
        Lines with every reference replaced in place by its expansion

    Raises:
        CircularReferenceError: A referenced skill is already on the chain
        SkillNotFoundError: A referenced skill does not exist
        InvalidStateError: The chain exceeds MAX_EXPANSION_DEPTH
    """
    return _expand(execution, skill_lookup, _ordered(visited))


def expand_skill(name: str, skill_lookup: SkillLookup) -> list[str]:
    """Expand a whole skill, counting the skill itself as visited."""
    skill = skill_lookup(name)
    if skill is None:
        raise SkillNotFoundError(name)
    return _expand(skill.execution, skill_lookup, (name,))


def try_expand_skill_references(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    visited: Iterable[str] = (),
) -> Result[list[str]]:
    """Result-returning variant of expand_skill_references."""
    try:
        return Ok(expand_skill_references(execution, skill_lookup, visited))
    except TaskplanError as e:
        return Err(e)


def validate_no_cycles(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    visited: Iterable[str] = (),
) -> bool:
    """
    Check that the references reachable from ``execution`` form no cycle.

    Returns False only for circular references; other expansion failures
    (unknown skills, excessive depth) are raised to the caller.
    """
    result = try_expand_skill_references(execution, skill_lookup, visited)
    if result.ok:
        return True
    if result.error.code == ErrorCode.CIRCULAR_REFERENCE:
        return False
    raise result.error


def _collect(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    chain: tuple[str, ...],
    referenced: set[str],
) -> None:
    if len(chain) > MAX_EXPANSION_DEPTH:
        return

    for line in execution:
        skill_name = parse_skill_reference(line)

        if skill_name is None or skill_name in chain:
            continue

        referenced.add(skill_name)

        skill = skill_lookup(skill_name)
        if skill is not None:
            _collect(skill.execution, skill_lookup, (*chain, skill_name), referenced)


def get_referenced_skills(
    execution: Sequence[str],
    skill_lookup: SkillLookup,
    visited: Iterable[str] = (),
) -> set[str]:
    """
    Collect every skill name transitively referenced from ``execution``.

    Unlike expansion this never fails: a revisited name or an unknown skill
    simply ends that branch. Unknown names are still reported, since they
    were referenced.
    """
    referenced: set[str] = set()
    _collect(execution, skill_lookup, _ordered(visited), referenced)
    return referenced
