"""Test configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

SKILL_TEMPLATE = """### Name
{name}

### Description
{description}

### Steps
{steps}

### Execution
{execution}
"""


def render_skill(
    name: str,
    execution: list[str],
    description: str = "A skill used by the test suite.",
    config: str | None = None,
) -> str:
    """Render skill markdown with one step per execution line."""
    content = SKILL_TEMPLATE.format(
        name=name,
        description=description,
        steps="\n".join(f"- Step {i + 1}" for i in range(len(execution))),
        execution="\n".join(f"- {line}" for line in execution),
    )
    if config:
        content += f"\n### Config\n{config}\n"
    return content


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """Empty skills directory."""
    directory = tmp_path / "skills"
    directory.mkdir()
    return directory


@pytest.fixture
def write_skill(skills_dir: Path) -> Callable[..., Path]:
    """Write a skill markdown file into ``skills_dir``."""

    def _write(key: str, name: str, execution: list[str], **kwargs) -> Path:
        path = skills_dir / f"{key}.md"
        path.write_text(render_skill(name, execution, **kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the per-user taskplan directory at a temp dir."""
    home = tmp_path / "home"
    monkeypatch.setenv("TASKPLAN_HOME", str(home))
    return home
