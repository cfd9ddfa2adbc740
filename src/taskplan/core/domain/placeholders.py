"""
Config Placeholder Scanning

Commands and actions reference user configuration with ``{dot.path}``
tokens. A path segment written entirely in upper case (``{app.VARIANT.repo}``)
is a variant placeholder: it must be replaced with a concrete variant name
before the path can be looked up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from taskplan.core.domain.config_utils import get_config_value
from taskplan.core.domain.errors import MissingConfigError

PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")


def _is_upper_case(part: str) -> bool:
    return part == part.upper() and part != part.lower()


@dataclass(frozen=True)
class PlaceholderInfo:
    """One ``{...}`` token found in a text."""

    original: str
    path: tuple[str, ...]
    has_variant: bool
    variant_index: int | None = None

    @property
    def dotted(self) -> str:
        return path_to_string(self.path)


def _to_info(match: re.Match[str]) -> PlaceholderInfo:
    path = tuple(match.group(1).split("."))
    variant_index = next(
        (index for index, part in enumerate(path) if _is_upper_case(part)), None
    )
    return PlaceholderInfo(
        original=match.group(0),
        path=path,
        has_variant=variant_index is not None,
        variant_index=variant_index,
    )


def parse_placeholder(text: str) -> PlaceholderInfo | None:
    """First placeholder in ``text``, or None."""
    match = PLACEHOLDER_PATTERN.search(text)
    return _to_info(match) if match else None


def extract_placeholders(text: str) -> list[PlaceholderInfo]:
    """All placeholders in ``text``, in order of appearance."""
    return [_to_info(match) for match in PLACEHOLDER_PATTERN.finditer(text)]


def resolve_variant(path: tuple[str, ...] | list[str], variant: str) -> tuple[str, ...]:
    """Replace upper-case path segments with the concrete variant name."""
    return tuple(variant if _is_upper_case(part) else part for part in path)


def path_to_string(path: tuple[str, ...] | list[str]) -> str:
    return ".".join(path)


def has_placeholders(text: str) -> bool:
    return PLACEHOLDER_PATTERN.search(text) is not None


def get_required_config_paths(text: str) -> list[str]:
    """Distinct non-variant config paths referenced by ``text``, in order."""
    paths: dict[str, None] = {}
    for placeholder in extract_placeholders(text):
        if not placeholder.has_variant:
            paths.setdefault(placeholder.dotted, None)
    return list(paths)


def replace_placeholders(text: str, config: dict[str, Any]) -> str:
    """
    Substitute placeholders with scalar values from a nested config.

    Unknown paths are left in place so they can be reported later.
    Variant placeholders must be resolved before calling this.
    """

    def _substitute(match: re.Match[str]) -> str:
        value = get_config_value(config, match.group(1))
        if value is None:
            return match.group(0)
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, text)


def find_unresolved_placeholders(command: str) -> None:
    """
    Guard run before handing a command to the execution collaborator.

    Raises:
        MissingConfigError: The command still contains ``{...}`` tokens
    """
    unresolved = [match.group(0) for match in PLACEHOLDER_PATTERN.finditer(command)]
    if unresolved:
        raise MissingConfigError(
            f"Command has {len(unresolved)} unresolved placeholder(s)",
            paths=[token[1:-1] for token in unresolved],
        )
