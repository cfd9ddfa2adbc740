"""Tests for the configuration requirement resolver."""

import pytest

from taskplan.application.requirement_resolver import (
    ConfigRequirementResolver,
    RequirementReport,
    get_task_variant,
)
from taskplan.core.domain.enums import TaskType
from taskplan.core.domain.errors import CircularReferenceError
from taskplan.core.domain.skill import ConfigRequirement, SkillDefinition
from taskplan.core.domain.skill_registry import SkillRegistry
from taskplan.core.domain.task import Task


def _task(action: str, **params) -> Task:
    if params:
        return Task(action=action, type=TaskType.EXECUTE, params=params)
    return Task(action=action, type=TaskType.EXECUTE)


@pytest.fixture
def registry() -> SkillRegistry:
    return SkillRegistry(
        [
            SkillDefinition(
                name="Navigate To Project",
                execution=["cd {product.VARIANT.repo}"],
            ),
            SkillDefinition(
                name="Build Project",
                execution=["[ Navigate To Project ]", "make -j{build.jobs}"],
                config={"build": {"jobs": "number"}, "product": {"alpha": {"repo": "string"}}},
            ),
            SkillDefinition(
                name="Broken",
                is_valid=False,
                validation_error="The skill file is missing a Steps section",
            ),
            SkillDefinition(name="Loop", execution=["[ Loop ]"]),
        ]
    )


class TestPlainTasks:
    """Tasks without a skill are scanned by their action text."""

    def test_duplicate_paths_reported_once(self, registry):
        tasks = [
            _task("Navigate to {project.alpha.path}"),
            _task("Build in {project.alpha.path}"),
        ]

        report = ConfigRequirementResolver(registry.lookup, {}).resolve(tasks)

        assert report.missing_config == [ConfigRequirement("project.alpha.path")]
        assert report.missing_config[0].type == "string"

    def test_present_config_is_not_reported(self, registry):
        config = {"project": {"alpha": {"path": "/src/alpha"}}}

        report = ConfigRequirementResolver(registry.lookup, config).resolve(
            [_task("cd {project.alpha.path} && {tools.make}")]
        )

        assert [req.path for req in report.missing_config] == ["tools.make"]

    def test_flat_config_keys_are_accepted(self, registry):
        report = ConfigRequirementResolver(registry.lookup, {"a.b": "x"}).resolve(
            [_task("use {a.b}")]
        )

        assert report.is_satisfied

    def test_null_value_counts_as_missing(self, registry):
        report = ConfigRequirementResolver(registry.lookup, {"a": {"b": None}}).resolve(
            [_task("use {a.b}")]
        )

        assert [req.path for req in report.missing_config] == ["a.b"]

    @pytest.mark.parametrize(
        "value",
        [["/a", "/b"], {"nested": "/a"}],
        ids=["list", "mapping"],
    )
    def test_non_scalar_value_counts_as_missing(self, registry, value):
        config = {"project": {"alpha": {"path": value}}}

        report = ConfigRequirementResolver(registry.lookup, config).resolve(
            [_task("cd {project.alpha.path}")]
        )

        assert [req.path for req in report.missing_config] == ["project.alpha.path"]

    def test_nested_prefix_counts_as_missing(self, registry):
        config = {"project": {"alpha": {"path": "/a"}}}
        resolver = ConfigRequirementResolver(registry.lookup, config)

        report = resolver.resolve([_task("ls {project.alpha}")])

        assert not resolver.is_configured("project.alpha")
        assert [req.path for req in report.missing_config] == ["project.alpha"]

    def test_false_and_zero_count_as_present(self, registry):
        config = {"flags": {"debug": False}, "build": {"jobs": 0}}

        report = ConfigRequirementResolver(registry.lookup, config).resolve(
            [_task("run --debug={flags.debug} -j{build.jobs}")]
        )

        assert report.is_satisfied

    def test_variant_placeholders_in_actions_are_skipped(self, registry):
        report = ConfigRequirementResolver(registry.lookup, {}).resolve(
            [_task("cd {product.VARIANT.repo}")]
        )

        assert report.missing_config == []

    def test_order_follows_first_appearance(self, registry):
        report = ConfigRequirementResolver(registry.lookup, {}).resolve(
            [_task("{b.x} {a.x}"), _task("{c.x} {a.x}")]
        )

        assert [req.path for req in report.missing_config] == ["b.x", "a.x", "c.x"]


class TestSkillTasks:
    """Tasks planned from a skill are scanned through its expansion."""

    def test_expanded_lines_resolve_variant_and_types(self, registry):
        task = _task("Build alpha", skill="Build Project", variant="Alpha")

        report = ConfigRequirementResolver(registry.lookup, {}).resolve([task])

        assert [req.to_dict() for req in report.missing_config] == [
            {"path": "product.alpha.repo", "type": "string"},
            {"path": "build.jobs", "type": "number"},
        ]

    def test_variant_from_other_param(self, registry):
        task = _task("Build", skill="Build Project", product="beta")

        report = ConfigRequirementResolver(registry.lookup, {}).resolve([task])

        assert "product.beta.repo" in [req.path for req in report.missing_config]

    def test_variant_placeholder_skipped_without_variant(self, registry):
        report = ConfigRequirementResolver(registry.lookup, {}).resolve(
            [_task("Build", skill="Build Project")]
        )

        assert [req.path for req in report.missing_config] == ["build.jobs"]

    def test_unknown_skill_does_not_raise(self, registry):
        task = _task("Run {tools.runner}", skill="Does Not Exist")

        report = ConfigRequirementResolver(registry.lookup, {}).resolve([task])

        assert [req.path for req in report.missing_config] == ["tools.runner"]

    def test_invalid_skill_reported_once_and_stops(self, registry):
        tasks = [
            _task("First {a.b}", skill="Broken"),
            _task("Second", skill="Broken"),
            _task("Other {c.d}"),
        ]

        report = ConfigRequirementResolver(registry.lookup, {}).resolve(tasks)

        assert report.missing_config == []
        assert [issue.to_dict() for issue in report.validation_errors] == [
            {"skill": "Broken", "issues": ["The skill file is missing a Steps section"]}
        ]
        assert not report.is_satisfied

    def test_circular_skill_propagates(self, registry):
        with pytest.raises(CircularReferenceError):
            ConfigRequirementResolver(registry.lookup, {}).resolve(
                [_task("Loop", skill="Loop")]
            )


class TestGetTaskVariant:
    def test_variant_param_wins(self):
        assert get_task_variant(_task("x", skill="S", product="beta", variant="GX")) == "gx"

    def test_skill_and_type_are_not_variants(self):
        assert get_task_variant(_task("x", skill="S", type="build")) is None

    def test_non_string_params_ignored(self):
        assert get_task_variant(_task("x", count=3, target="Prod")) == "prod"

    def test_no_params(self):
        assert get_task_variant(_task("x")) is None


class TestRequirementReport:
    def test_to_dict(self):
        report = RequirementReport(missing_config=[ConfigRequirement("a.b")])

        assert report.to_dict() == {
            "missing_config": [{"path": "a.b", "type": "string"}],
            "validation_errors": [],
        }
