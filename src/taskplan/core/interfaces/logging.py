"""
Logger contract for domain objects that accept an injected logger.

``SkillRegistry`` reports definition overrides through it. A bound structlog
logger satisfies it; tests can pass any object with matching methods.
"""

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger taking a dotted event name plus key/value context."""

    def debug(self, event: str, **kwargs: Any) -> Any: ...
