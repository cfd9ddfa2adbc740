"""Helpers for nested user configuration and its dot-notation view."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

ConfigScalar = str | bool | int | float


def is_config_scalar(value: Any) -> bool:
    """Only strings, booleans and numbers can fill a placeholder."""
    return isinstance(value, (str, bool, int, float))


def flatten_config(config: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """
    Flatten a nested config mapping to dot-notation keys.

    Lists and scalars are leaves; empty mappings contribute no keys. Keys
    keep the order they appear in, depth-first.

    Example:
        >>> flatten_config({"a": {"b": 1}})
        {'a.b': 1}
    """
    result: dict[str, Any] = {}
    stack: list[tuple[Iterator[tuple[Any, Any]], str]] = [(iter(config.items()), prefix)]

    while stack:
        items, node_prefix = stack[-1]
        entry = next(items, None)
        if entry is None:
            stack.pop()
            continue
        key, value = entry
        full_key = f"{node_prefix}.{key}" if node_prefix else str(key)
        if isinstance(value, Mapping):
            stack.append((iter(value.items()), full_key))
        else:
            result[full_key] = value

    return result


def _walk(config: Mapping[str, Any], path: str) -> tuple[bool, Any]:
    current: Any = config
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return False, None
        current = current[part]
    return True, current


def get_config_value(config: Mapping[str, Any], path: str) -> ConfigScalar | None:
    """
    Scalar value at ``path``, or None when absent or not a scalar.

    Nested keys are tried first, then an already dot-keyed entry such as
    ``{"a.b": 1}``.
    """
    found, value = _walk(config, path)
    if not found:
        value = flatten_config(config).get(path)
    return value if is_config_scalar(value) else None


def has_config_path(config: Mapping[str, Any], path: str) -> bool:
    """True if ``path`` holds a string, boolean or number value."""
    return get_config_value(config, path) is not None
