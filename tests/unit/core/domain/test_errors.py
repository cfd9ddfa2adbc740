"""Tests for domain error types, result values and error_payload."""

import pytest

from taskplan.core.domain.enums import ErrorCode, ErrorSeverity
from taskplan.core.domain.errors import (
    CircularReferenceError,
    ConfigCorruptionError,
    Err,
    FileReadError,
    InvalidInputError,
    InvalidStateError,
    MissingConfigError,
    Ok,
    ParseError,
    SkillNotFoundError,
    TaskplanError,
    error_payload,
    wrap_error,
)


class TestTaskplanError:
    """Tests for TaskplanError base exception."""

    def test_create_basic(self) -> None:
        err = TaskplanError(message="Something failed")
        assert err.message == "Something failed"
        assert err.code == ErrorCode.INVALID_STATE
        assert err.details == {}
        assert err.cause is None

    def test_is_exception(self) -> None:
        with pytest.raises(TaskplanError) as exc_info:
            raise TaskplanError(message="Raised error", code=ErrorCode.API_ERROR)
        assert str(exc_info.value) == "Raised error"
        assert exc_info.value.code == ErrorCode.API_ERROR

    def test_cause_is_chained(self) -> None:
        original = ValueError("boom")
        err = TaskplanError(message="wrapped", code=ErrorCode.PARSE_ERROR, cause=original)
        assert err.cause is original
        assert err.__cause__ is original


class TestSeverity:
    """Tests for the three severity bands."""

    @pytest.mark.parametrize(
        "code, severity",
        [
            (ErrorCode.INVALID_INPUT, ErrorSeverity.USER),
            (ErrorCode.MISSING_CONFIG, ErrorSeverity.USER),
            (ErrorCode.SKILL_NOT_FOUND, ErrorSeverity.USER),
            (ErrorCode.FILE_READ_ERROR, ErrorSeverity.SYSTEM),
            (ErrorCode.FILE_WRITE_ERROR, ErrorSeverity.SYSTEM),
            (ErrorCode.NETWORK_ERROR, ErrorSeverity.SYSTEM),
            (ErrorCode.API_ERROR, ErrorSeverity.SYSTEM),
            (ErrorCode.PARSE_ERROR, ErrorSeverity.SYSTEM),
            (ErrorCode.CIRCULAR_REFERENCE, ErrorSeverity.FATAL),
            (ErrorCode.INVALID_STATE, ErrorSeverity.FATAL),
            (ErrorCode.CONFIG_CORRUPTION, ErrorSeverity.FATAL),
        ],
    )
    def test_code_severity(self, code, severity) -> None:
        assert code.severity is severity
        assert TaskplanError(message="x", code=code).severity is severity

    def test_is_fatal(self) -> None:
        assert CircularReferenceError(["A", "A"]).is_fatal
        assert not SkillNotFoundError("A").is_fatal


class TestSubclasses:
    """Tests for the code-specific subclasses."""

    def test_codes(self) -> None:
        assert InvalidInputError("x").code == ErrorCode.INVALID_INPUT
        assert MissingConfigError("x").code == ErrorCode.MISSING_CONFIG
        assert SkillNotFoundError("A").code == ErrorCode.SKILL_NOT_FOUND
        assert CircularReferenceError(["A"]).code == ErrorCode.CIRCULAR_REFERENCE
        assert InvalidStateError("x").code == ErrorCode.INVALID_STATE
        assert ParseError("x").code == ErrorCode.PARSE_ERROR
        assert FileReadError("x").code == ErrorCode.FILE_READ_ERROR
        assert ConfigCorruptionError("x").code == ErrorCode.CONFIG_CORRUPTION

    def test_all_are_taskplan_errors(self) -> None:
        assert isinstance(SkillNotFoundError("A"), TaskplanError)
        assert isinstance(CircularReferenceError(["A"]), TaskplanError)

    def test_circular_reference_chain(self) -> None:
        err = CircularReferenceError(["A", "B", "A"])
        assert err.chain == ["A", "B", "A"]
        assert str(err) == "Circular skill reference detected: A → B → A"
        assert err.details == {"chain": ["A", "B", "A"]}

    def test_skill_not_found_details(self) -> None:
        err = SkillNotFoundError("Deploy App")
        assert err.details["skill_name"] == "Deploy App"
        assert "Deploy App" in str(err)

    def test_file_errors_keep_path(self) -> None:
        err = FileReadError("cannot read", path="/tmp/x", cause=OSError("denied"))
        assert err.details == {"path": "/tmp/x"}
        assert isinstance(err.cause, OSError)


class TestHelpers:
    """Tests for wrap_error, error_payload and result values."""

    def test_wrap_error(self) -> None:
        original = KeyError("k")
        err = wrap_error(original, ErrorCode.FILE_WRITE_ERROR, "save failed")
        assert err.code == ErrorCode.FILE_WRITE_ERROR
        assert err.cause is original
        assert err.message == "save failed"

    def test_error_payload(self) -> None:
        inner = ParseError("bad yaml")
        outer = TaskplanError(message="outer", code=ErrorCode.CONFIG_CORRUPTION, cause=inner)

        payload = error_payload(outer, extra={"plan": "p.json"})

        assert payload["success"] is False
        assert payload["code"] == "CONFIG_CORRUPTION"
        assert payload["severity"] == "fatal"
        assert payload["cause"]["code"] == "PARSE_ERROR"
        assert payload["plan"] == "p.json"

    def test_error_payload_foreign_cause(self) -> None:
        payload = error_payload(ParseError("x", cause=ValueError("v")))
        assert payload["cause"] == {"error": "v", "error_type": "ValueError"}

    def test_ok_and_err(self) -> None:
        ok = Ok([1, 2])
        err = Err(InvalidInputError("nope"))

        assert ok.ok and ok.unwrap() == [1, 2]
        assert not err.ok
        with pytest.raises(InvalidInputError):
            err.unwrap()
