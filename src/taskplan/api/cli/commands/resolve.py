"""Resolve command - validate and expand a plan, report missing config."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from taskplan.application.plan_resolver import PlanResolver
from taskplan.core.domain.errors import TaskplanError, error_payload
from taskplan.infrastructure.config.config_loader import load_user_config
from taskplan.infrastructure.skills.skill_loader import create_skill_registry

console = Console()

# Exit code when the plan is valid but cannot run yet
EXIT_NOT_READY = 2


def _read_plan(plan_file: str) -> str:
    if plan_file == "-":
        return sys.stdin.read()
    path = Path(plan_file)
    if not path.is_file():
        console.print(f"[red]Plan file not found: {plan_file}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def resolve_plan(
    plan_file: str = typer.Argument(..., help="Plan JSON file, or '-' for stdin"),
    skills_dir: Optional[Path] = typer.Option(
        None, "--skills-dir", "-s", help="Skills directory (default: ~/.taskplan/skills)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="User config YAML (default: ~/.taskplan/config.yaml)"
    ),
):
    """Validate a plan, expand skill references and list missing config.

    Prints a JSON report. Exits with 1 on an invalid plan or expansion
    failure, and with 2 when configuration values are still missing.

    Examples:
        taskplan resolve plan.json
        cat plan.json | taskplan resolve - --skills-dir ./skills
    """
    text = _read_plan(plan_file)

    try:
        config = load_user_config(config_file)
    except TaskplanError as e:
        console.print_json(data=error_payload(e))
        raise typer.Exit(1)

    registry = create_skill_registry(skills_dir)
    result = PlanResolver(registry, config).resolve_text(text)

    if not result.ok:
        console.print_json(data=error_payload(result.error))
        raise typer.Exit(1)

    report = result.value
    console.print_json(data=report.to_dict())
    if not report.is_ready:
        raise typer.Exit(EXIT_NOT_READY)
