"""Skills command - List and inspect skills and their expansion."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskplan.core.domain.errors import TaskplanError
from taskplan.core.domain.skill_expander import expand_skill, get_referenced_skills
from taskplan.infrastructure.skills.skill_loader import create_skill_registry

app = typer.Typer(help="Skill inspection")
console = Console()

_SKILLS_DIR_OPTION = typer.Option(
    None, "--skills-dir", "-s", help="Skills directory (default: ~/.taskplan/skills)"
)


@app.command("list")
def list_skills(skills_dir: Optional[Path] = _SKILLS_DIR_OPTION) -> None:
    """List available skills."""
    registry = create_skill_registry(skills_dir)

    if not len(registry):
        console.print("[yellow]No skills found.[/yellow]")
        return

    table = Table(title="Available Skills")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Key", style="dim")
    table.add_column("Status", style="white")

    for name in registry.list_skills():
        skill = registry.lookup(name)
        if not skill.is_valid:
            status = f"[red]invalid[/red]: {skill.validation_error}"
        elif skill.is_incomplete:
            status = "[yellow]incomplete[/yellow]"
        else:
            status = "[green]ok[/green]"
        table.add_row(skill.name, skill.key or "", status)

    console.print(table)
    console.print(f"\n[dim]Total: {len(registry)} skill(s)[/dim]")


@app.command("show")
def show_skill(
    name: str = typer.Argument(..., help="Skill display name"),
    skills_dir: Optional[Path] = _SKILLS_DIR_OPTION,
) -> None:
    """Show a skill with its fully expanded execution lines."""
    registry = create_skill_registry(skills_dir)
    skill = registry.lookup(name)

    if skill is None:
        console.print(f"[red]Skill not found: {name}[/red]")
        available = registry.list_skills()
        if available:
            console.print(f"\n[dim]Available skills: {', '.join(available)}[/dim]")
        raise typer.Exit(1)

    console.print(Panel(f"[bold cyan]{skill.name}[/bold cyan]", expand=False))
    if skill.description:
        console.print(f"\n[bold]Description:[/bold]\n  {skill.description}")

    if skill.steps:
        console.print("\n[bold]Steps:[/bold]")
        for index, step in enumerate(skill.steps, 1):
            console.print(f"  {index}. {step}")

    references = get_referenced_skills(skill.execution, registry.lookup, (skill.name,))
    if references:
        console.print(f"\n[bold]References:[/bold] {', '.join(sorted(references))}")

    try:
        lines = expand_skill(skill.name, registry.lookup)
    except TaskplanError as e:
        console.print(f"\n[red]{e.code.value}: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold]Execution:[/bold]")
    for line in lines:
        console.print(f"  {line}", markup=False, highlight=False)
