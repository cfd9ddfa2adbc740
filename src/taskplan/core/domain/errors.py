"""Domain-specific exception types and result values for taskplan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, TypeVar, Union

from taskplan.core.domain.enums import ErrorCode, ErrorSeverity

T = TypeVar("T")


@dataclass
class TaskplanError(Exception):
    """Base exception carrying an ErrorCode and an optional causal chain."""

    message: str
    code: ErrorCode = ErrorCode.INVALID_STATE
    cause: BaseException | None = None
    details: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        return self.message

    @property
    def severity(self) -> ErrorSeverity:
        return self.code.severity

    @property
    def is_fatal(self) -> bool:
        return self.severity is ErrorSeverity.FATAL


class InvalidInputError(TaskplanError):
    """Raised when an untrusted payload does not match the task schema."""

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, code=ErrorCode.INVALID_INPUT, cause=cause, details=details
        )


class MissingConfigError(TaskplanError):
    """Raised when a command still references configuration that is absent."""

    def __init__(
        self,
        message: str,
        *,
        paths: list[str] | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if paths:
            details.setdefault("paths", list(paths))
        self.paths = list(paths or [])
        super().__init__(message=message, code=ErrorCode.MISSING_CONFIG, details=details)


class SkillNotFoundError(TaskplanError):
    """Raised when a skill reference names a skill that is not registered."""

    def __init__(self, skill_name: str, *, details: Dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details.setdefault("skill_name", skill_name)
        self.skill_name = skill_name
        super().__init__(
            message=f'Skill "{skill_name}" was not found. '
            "Check the skill name or add a matching skill file.",
            code=ErrorCode.SKILL_NOT_FOUND,
            details=details,
        )


class CircularReferenceError(TaskplanError):
    """Raised when skill references form a cycle on one expansion branch."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            message=f"Circular skill reference detected: {' → '.join(self.chain)}",
            code=ErrorCode.CIRCULAR_REFERENCE,
            details={"chain": list(self.chain)},
        )


class InvalidStateError(TaskplanError):
    """Raised when processing cannot continue, e.g. a recursion limit is hit."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code=ErrorCode.INVALID_STATE, details=details)


class ParseError(TaskplanError):
    """Raised when raw text or a skill record cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, code=ErrorCode.PARSE_ERROR, cause=cause, details=details
        )


class FileReadError(TaskplanError):
    """Raised when a collaborator file cannot be read."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        details = {"path": path} if path else {}
        super().__init__(
            message=message, code=ErrorCode.FILE_READ_ERROR, cause=cause, details=details
        )


class ConfigCorruptionError(TaskplanError):
    """Raised when the user configuration store holds unusable data."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        details = {"path": path} if path else {}
        super().__init__(
            message=message,
            code=ErrorCode.CONFIG_CORRUPTION,
            cause=cause,
            details=details,
        )


def wrap_error(error: BaseException, code: ErrorCode, message: str) -> TaskplanError:
    """Wrap an arbitrary exception with context, keeping it as the cause."""
    return TaskplanError(message=message, code=code, cause=error)


def error_payload(error: TaskplanError, extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Convert a TaskplanError into a JSON-serializable payload."""
    payload: Dict[str, Any] = {
        "success": False,
        "error": str(error),
        "code": error.code.value,
        "severity": error.severity.value,
        "details": error.details or {},
    }
    if isinstance(error.cause, TaskplanError):
        payload["cause"] = error_payload(error.cause)
    elif error.cause is not None:
        payload["cause"] = {"error": str(error.cause), "error_type": type(error.cause).__name__}
    if extra:
        payload.update(extra)
    return payload


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of an operation that can fail predictably."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a classified TaskplanError."""

    error: TaskplanError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Ok[T], Err]
