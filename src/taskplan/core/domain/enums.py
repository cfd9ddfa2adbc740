"""
Core Domain Enums

Defines task types, capability origins, error codes and config value
kinds to eliminate magic strings throughout the codebase.
"""

from enum import Enum


class TaskType(str, Enum):
    """Kind of a planned task as produced by the planning LLM."""

    CONFIG = "config"
    SCHEDULE = "schedule"
    EXECUTE = "execute"
    ANSWER = "answer"
    INTROSPECT = "introspect"
    REPORT = "report"
    DEFINE = "define"
    IGNORE = "ignore"
    SELECT = "select"
    DISCARD = "discard"
    GROUP = "group"


class Origin(str, Enum):
    """Provenance of a capability listed by introspection."""

    BUILT_IN = "builtin"
    USER_PROVIDED = "user"
    INDIRECT = "indirect"


class ErrorSeverity(str, Enum):
    """How a failure should be treated by the caller.

    - USER: surfaced for display or remediation, never crashes the process.
    - SYSTEM: originates in an I/O collaborator and is wrapped with a cause.
    - FATAL: aborts the current resolution pass entirely.
    """

    USER = "user"
    SYSTEM = "system"
    FATAL = "fatal"


class ErrorCode(str, Enum):
    """Error codes for categorization and programmatic handling."""

    # User errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_CONFIG = "MISSING_CONFIG"
    SKILL_NOT_FOUND = "SKILL_NOT_FOUND"

    # System errors
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    PARSE_ERROR = "PARSE_ERROR"

    # Fatal errors
    CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"
    INVALID_STATE = "INVALID_STATE"
    CONFIG_CORRUPTION = "CONFIG_CORRUPTION"

    @property
    def severity(self) -> ErrorSeverity:
        """Severity band this code belongs to."""
        if self in _USER_CODES:
            return ErrorSeverity.USER
        if self in _FATAL_CODES:
            return ErrorSeverity.FATAL
        return ErrorSeverity.SYSTEM


_USER_CODES = frozenset(
    {ErrorCode.INVALID_INPUT, ErrorCode.MISSING_CONFIG, ErrorCode.SKILL_NOT_FOUND}
)
_FATAL_CODES = frozenset(
    {
        ErrorCode.CIRCULAR_REFERENCE,
        ErrorCode.INVALID_STATE,
        ErrorCode.CONFIG_CORRUPTION,
    }
)


class ConfigValueType(str, Enum):
    """Value kinds a skill's config schema may declare for a leaf."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
