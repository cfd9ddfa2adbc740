"""Tests for config placeholder scanning."""

import pytest

from taskplan.core.domain.enums import ErrorCode
from taskplan.core.domain.errors import MissingConfigError
from taskplan.core.domain.placeholders import (
    extract_placeholders,
    find_unresolved_placeholders,
    get_required_config_paths,
    has_placeholders,
    parse_placeholder,
    replace_placeholders,
    resolve_variant,
)


class TestExtractPlaceholders:
    """Tests for placeholder extraction."""

    def test_extracts_in_order(self):
        found = extract_placeholders("cd {project.alpha.path} && {tools.make}")

        assert [p.original for p in found] == ["{project.alpha.path}", "{tools.make}"]
        assert found[0].path == ("project", "alpha", "path")
        assert not found[0].has_variant

    def test_detects_variant_segment(self):
        info = parse_placeholder("cd {product.VARIANT.repo}")

        assert info.has_variant
        assert info.variant_index == 1

    def test_no_placeholders(self):
        assert parse_placeholder("plain text") is None
        assert extract_placeholders("plain text") == []
        assert not has_placeholders("plain {} text")
        assert has_placeholders("a {b}")

    def test_required_paths_are_unique_and_skip_variants(self):
        text = "{a.b} {a.b} {c.TARGET.d} {e}"

        assert get_required_config_paths(text) == ["a.b", "e"]

    def test_resolve_variant(self):
        assert resolve_variant(("product", "VARIANT", "repo"), "gx") == ("product", "gx", "repo")


class TestReplacePlaceholders:
    """Tests for replace_placeholders."""

    def test_substitutes_known_values(self):
        config = {"project": {"path": "/src", "verbose": True, "jobs": 4}}

        result = replace_placeholders(
            "cd {project.path} -v={project.verbose} -j{project.jobs}", config
        )

        assert result == "cd /src -v=true -j4"

    def test_keeps_unknown_placeholders(self):
        assert replace_placeholders("cd {missing.path}", {}) == "cd {missing.path}"


class TestFindUnresolvedPlaceholders:
    """Tests for the pre-execution guard."""

    def test_resolved_command_passes(self):
        find_unresolved_placeholders("make build")

    def test_unresolved_command_raises(self):
        with pytest.raises(MissingConfigError) as exc_info:
            find_unresolved_placeholders("cd {a.b} && {c}")

        assert exc_info.value.code == ErrorCode.MISSING_CONFIG
        assert exc_info.value.paths == ["a.b", "c"]
        assert "2 unresolved" in str(exc_info.value)
